"""Ultrasound-based baby size and health tracking."""

from src.domain.schema import Schema, media, number, string
from src.domain.use_case import UseCase

NAME = "baby-health-tracker"

REQUEST = Schema(
    media(
        "ultrasoundImageDataUri",
        "A photo of an ultrasound, as a data URI that must include a MIME type and use "
        "Base64 encoding. Expected format: 'data:<mimetype>;base64,<encoded_data>'.",
    ),
    number("pregnancyWeeks", "The number of weeks of pregnancy."),
    string("additionalNotes", "Any additional notes about the pregnancy.", required=False),
)

RESPONSE = Schema(
    string("babySizeEstimate", "An estimation of the baby size."),
    string("healthAssessment", "An assessment of the baby health."),
    string("recommendations", "Personalized recommendations for the pregnancy."),
)

PROMPT = """\
You are an expert in prenatal care, specializing in analyzing ultrasound images to track baby health and size.

Based on the ultrasound image, the number of pregnancy weeks, and any additional notes, provide an estimation of the baby size, an assessment of the baby health, and personalized recommendations for the pregnancy.

Ultrasound Image: {{media url=ultrasoundImageDataUri}}
Pregnancy Weeks: {{{pregnancyWeeks}}}
Additional Notes: {{{additionalNotes}}}

Ensure your response is easy to understand and provides actionable advice.
"""

USE_CASE = UseCase.define(
    NAME,
    request=REQUEST,
    response=RESPONSE,
    prompt=PROMPT,
    description="Estimates baby size and health from an ultrasound image.",
    failure_message="Failed to get baby health analysis from AI.",
)
