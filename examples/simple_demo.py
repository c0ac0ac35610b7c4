#!/usr/bin/env python3  # noqa: EXE001
"""
Minimal demonstration of the SRS assistant

Recommends an SDLC model, drafts a plan, and assembles an SRS skeleton for a
single project description. Requires GEMINI_API_KEY in the environment.
"""  # noqa: D212, D415

from srs_assist import (
    GeminiClient,
    RequirementsAssistant,
    SRSAssistError,
    assemble_srs_document,
)

PROJECT = (
    "An online ordering site for a neighbourhood bakery: customers order cakes "
    "for pickup, staff manage a daily production list."
)


def main():  # noqa: ANN201, D103
    print("SRS Assistant - Demo\n")

    assistant = RequirementsAssistant(GeminiClient())

    try:
        recommendation = assistant.recommend_sdlc(PROJECT)
        plan = assistant.generate_plan(PROJECT)
    except SRSAssistError as e:
        print(f"Generation failed ({e.kind.value}): {e.message}")
        return

    print(
        f"Recommended model: {recommendation['model']} "
        f"(confidence {recommendation['confidence']:.2f})"
    )
    print(f"Why: {recommendation['why']}\n")

    print("Milestones:")
    for i, milestone in enumerate(plan["milestones"], 1):
        print(f"{i}. {milestone['title']} ({milestone['duration_weeks']} weeks)")

    srs = assemble_srs_document("Bakery Orders", PROJECT, [])
    print(
        f"\nSRS skeleton: {srs.completed_sections}/{srs.total_sections} subsections complete"
    )


if __name__ == "__main__":
    main()
