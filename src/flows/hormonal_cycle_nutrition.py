"""Nutrition advice by cycle phase, pregnancy trimester, or postpartum recovery."""

from src.domain.schema import Schema, boolean, number, string
from src.domain.use_case import UseCase

NAME = "hormonal-cycle-nutrition"

REQUEST = Schema(
    string(
        "cyclePhase",
        "The current phase of the user's menstrual cycle "
        "(e.g., menstruation, follicular, ovulation, luteal).",
        required=False,
    ),
    number("pregnancyTrimester", "The user's current pregnancy trimester (1, 2, or 3).", required=False),
    string("mood", "The current mood of the user.", required=False),
    string("physicalSymptoms", "Any physical symptoms the user is experiencing.", required=False),
    string(
        "dietaryPreferences",
        "Any dietary preferences or restrictions of the user (e.g., vegan, vegetarian, gluten-free).",
        required=False,
    ),
    string(
        "medicalHistory",
        "Relevant medical history, including thyroid issues, PCOS, or PCOD.",
        required=False,
    ),
    boolean("postDelivery", "Set to true if user is in post-delivery phase.", required=False),
)

RESPONSE = Schema(
    string(
        "recommendations",
        "A detailed, structured response. Each section heading (like 'Key Nutrients:', "
        "'Foods to Eat:', 'Lifestyle & Exercise:') must be enclosed in double asterisks to be "
        "bold (e.g., **Key Nutrients:**). Each item under a heading should be on a new line, "
        "starting with a hyphen.",
    ),
    string(
        "dashboardTip",
        "A very short, crisp 2-3 line summary of the most important nutritional advice "
        "for the dashboard.",
        required=False,
    ),
)

PROMPT = """\
You are an expert nutritionist specializing in women's hormonal health, pregnancy, and postpartum recovery.

**IMPORTANT FORMATTING RULES:**
- All section headings MUST be bolded by enclosing them in double asterisks (e.g., **Key Nutrients:**).
- Each item under a heading MUST start on a new line with a hyphen (-).

{{#if pregnancyTrimester}}
You are providing advice for a pregnant person in trimester {{{pregnancyTrimester}}}.

**User Preferences:**
- Dietary: {{{dietaryPreferences}}}
- Medical History: {{{medicalHistory}}}

**Your Task:** Provide a detailed, structured response with specific sections for diet, lifestyle, and exercise.

**Output format:**
- **recommendations**: Use these exact headings: **Key Nutrients:**, **Foods to Eat:**, **Foods to Avoid:**, and **Lifestyle & Exercise:**. This should be comprehensive.
- **dashboardTip**: Provide a very short, 2-3 line summary of the absolute most important advice for this trimester. For example, "Focus on folate-rich foods like lentils and spinach for neural tube development. Stay hydrated and consider gentle walks."

{{else if postDelivery}}
You are providing advice for a person who has recently given birth.

**User Preferences:**
- Dietary: {{{dietaryPreferences}}}

**Your Task:** Provide a detailed, structured response for postpartum recovery.

**Output format:**
- **recommendations**: Use these exact headings: **Key Nutrients for Recovery:**, **Foods for Healing & Energy:**, **Gentle Exercises:**.
- **dashboardTip**: Provide a very short, 2-3 line summary about postpartum recovery nutrition.

{{else}}
You are providing general nutrition advice based on the menstrual cycle.

**User Information:**
- Cycle Phase: {{{cyclePhase}}}
- Mood: {{{mood}}}
- Physical Symptoms: {{{physicalSymptoms}}}
- Dietary Preferences: {{{dietaryPreferences}}}
- Medical History: {{{medicalHistory}}}

**Your Task:** Provide personalized nutrition and diet recommendations.

**Output format:**
- **recommendations**: Use headings like **Foods to Focus On:** and **Lifestyle Tips:**. Provide a comprehensive response in a single block of text, following the formatting rules.
- **dashboardTip**: Create a short, 2-3 line summary of the main point in the recommendations.
{{/if}}
"""

USE_CASE = UseCase.define(
    NAME,
    request=REQUEST,
    response=RESPONSE,
    prompt=PROMPT,
    description="Personalized nutrition for cycle phase, pregnancy trimester or postpartum.",
    failure_message="Failed to get nutrition advice from AI.",
)
