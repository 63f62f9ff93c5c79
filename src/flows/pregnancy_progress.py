"""Week-by-week fetal development summary."""

from src.domain.schema import Schema, number, string
from src.domain.use_case import UseCase

NAME = "pregnancy-progress"

REQUEST = Schema(
    number("pregnancyWeeks", "The number of weeks of pregnancy."),
)

RESPONSE = Schema(
    string(
        "fetalDevelopment",
        "A detailed, one-paragraph description of the baby's key development milestones for "
        "the given week of pregnancy. This should include major organ formation, new "
        "abilities, and other significant changes.",
    ),
    string(
        "babySizeComparison",
        "A simple and relatable comparison of the baby's size to a common fruit, vegetable, "
        "or seed (e.g., 'a poppy seed', 'a lime', 'an avocado').",
    ),
    string(
        "motherSymptoms",
        "A detailed description of common symptoms the mother might be experiencing during "
        "this week, such as nausea, fatigue, or body changes.",
    ),
)

PROMPT = """
You are an expert embryologist and gynecologist. Your task is to provide a clear, reassuring, and scientifically accurate summary of fetal development and maternal symptoms for a specific week of pregnancy.

Based on your expert knowledge for week {{{pregnancyWeeks}}}, provide the following:
1.  **fetalDevelopment**: A detailed description of the most important developmental milestones for that week. Mention key organ development, new abilities, and other significant changes.
2.  **babySizeComparison**: A simple, relatable comparison of the baby's size to a common fruit, vegetable, or seed (e.g., 'a poppy seed', 'a lime', 'an avocado').
3.  **motherSymptoms**: A detailed summary of the common physical and emotional symptoms a mother might experience this week (e.g., morning sickness, fatigue, backaches, mood changes).

Your tone should be informative and encouraging for an expecting mother.
"""

USE_CASE = UseCase.define(
    NAME,
    request=REQUEST,
    response=RESPONSE,
    prompt=PROMPT,
    description="Fetal development, size comparison and maternal symptoms for a given week.",
    failure_message="Failed to get pregnancy progress from AI.",
)
