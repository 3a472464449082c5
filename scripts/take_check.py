#!/usr/bin/env python3
"""
Security Check in the Terminal

Walks through the funnel interactively, prints the results and optionally
submits the contact details to the API.

Usage:
    python take_check.py
    python take_check.py --lang en --answers-file ~/.security-check.json
    python take_check.py --submit --url http://localhost:8000
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.answers import AnswersStore, JsonFileAnswersStorage
from domain.funnel import FunnelSession, FunnelStep
from domain.questions import Language, Question, get_questions
from services.api_client import ApiError, FunnelApiClient
from services.results_service import build_results
from services.submission_service import build_lead_payload, submit_lead


def ask(question: Question, current: str) -> str:
    print()
    print(question.text)
    if question.subtext:
        print(f"  {question.subtext}")
    for index, option in enumerate(question.options, start=1):
        marker = "*" if option.id == current else " "
        print(f" {marker}{index}. {option.text}")

    while True:
        raw = input("> ").strip()
        if not raw and current:
            return current
        if raw.isdigit() and 1 <= int(raw) <= len(question.options):
            return question.options[int(raw) - 1].id
        print(f"Please enter a number between 1 and {len(question.options)}.")


def run_quiz(session: FunnelSession, language: Language) -> None:
    questions = get_questions(language)
    session.start()
    while session.step in (FunnelStep.LEVEL1, FunnelStep.LEVEL2, FunnelStep.LEVEL3):
        print(f"\n=== {session.step.value} ===")
        # Level membership depends on the level 1 answers.
        for question_id in session.current_questions():
            answer = ask(questions[question_id], session.store.get(question_id))
            session.set_answer(question_id, answer)
        session.advance()


def print_results(session: FunnelSession, language: Language) -> None:
    results = build_results(session.answers, language)
    print()
    print("=" * 60)
    print(results.overall.headline)
    print("=" * 60)
    print(results.overall.summary)
    print()
    for area in results.areas:
        print(f"{area.title:<40} {area.score}/6  {area.label.text}")
        print(f"  {area.text}")
    print()
    print(f"Average: {results.average:.2f}")


def read_contact() -> dict:
    print("\nContact details")
    contact = {
        "company": input("Company: "),
        "contact": input("Contact person: "),
        "employeesRange": input("Employees (e.g. 21-50): "),
        "email": input("Email: "),
        "phone": input("Phone: "),
        "role": input("Role (optional): "),
        "notes": input("Biggest challenge (optional): "),
    }
    contact["consent"] = input("May we contact you? [y/N] ").strip().lower() in ("y", "yes", "j", "ja")
    return contact


def main() -> int:
    parser = argparse.ArgumentParser(description="Take the security check in the terminal")
    parser.add_argument("--lang", default="de", help="Language code ('de' or 'en')")
    parser.add_argument("--answers-file", type=Path, help="Persist answers between runs in this file")
    parser.add_argument("--submit", action="store_true", help="Submit contact details to the API")
    parser.add_argument("--url", default="http://localhost:8000", help="Base URL of the API")
    args = parser.parse_args()

    language = Language.resolve(args.lang)
    storage = JsonFileAnswersStorage(args.answers_file) if args.answers_file else None
    session = FunnelSession(AnswersStore(storage))

    try:
        run_quiz(session, language)
        print_results(session, language)
        if not args.submit:
            return 0

        session.advance()  # results -> form
        with FunnelApiClient(args.url) as client:
            while session.step is FunnelStep.FORM:
                payload = build_lead_payload(session.answers, read_contact(), language)
                try:
                    lead = submit_lead(session, client.create_lead, payload)
                except ApiError as e:
                    print(f"\nERROR: {e.message}", file=sys.stderr)
                    if input("Try again? [y/N] ").strip().lower() not in ("y", "yes", "j", "ja"):
                        return 1
                    continue
                print(f"\nThank you! Reference: {lead.id}")
        return 0

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
