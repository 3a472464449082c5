"""Application services on top of the domain and repositories."""
