"""Pure domain model: question catalog, scoring, maturity tiers, funnel state and leads."""
