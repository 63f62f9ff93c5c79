"""
Next-period prediction.

Predicts the start date of the next period from logged cycles, and asks for
a menstrual health analysis (regularity, PCOS/PCOD, menopause signals) and
a day-by-day flow forecast.
"""

from src.domain.schema import Schema, array, number, record, string
from src.domain.use_case import UseCase

NAME = "period-predictions"

REQUEST = Schema(
    array(
        "pastCycleData",
        record(
            string("start", "The start date of the period in ISO format (YYYY-MM-DD)."),
            string("end", "The end date of the period in ISO format (YYYY-MM-DD)."),
        ),
        "An array of past period start and end dates.",
    ),
    string("mood", "The user current mood."),
    string("physicalSymptoms", "The user physical symptoms."),
    number("age", "The age of the user.", required=False),
    string(
        "medicalHistory",
        "Any pre-existing medical conditions like Thyroid, PCOS etc.",
        required=False,
    ),
)

RESPONSE = Schema(
    string(
        "predictedStartDate",
        "The predicted start date of the next period in ISO format (YYYY-MM-DD).",
    ),
    number("confidence", "A number between 0 and 1 indicating the confidence in the prediction."),
    string("reasoning", "The reasoning behind the prediction."),
    string(
        "healthAnalysis",
        "An analysis of menstrual health, including warnings for PCOS/PCOD, irregularities, "
        "or menopause based on cycle history, age and medical conditions.",
        required=False,
    ),
    string(
        "flowPrediction",
        'A day-by-day prediction of the menstrual flow (e.g., "Day 1: Medium, Day 2: Heavy, '
        'Day 3: Heavy, Day 4: Medium, Day 5: Light").',
        required=False,
    ),
)

PROMPT = """\
You are an AI period prediction and women's health expert. You will predict the start date of the next period and analyze the user's menstrual health based on their past cycle data, age, medical history, mood, and physical symptoms.

**User Information:**
- Age: {{{age}}}
- Medical History: {{{medicalHistory}}}
- Past Cycle Data: {{#each pastCycleData}}Start: {{start}}, End: {{end}}; {{/each}}
- Current Mood: {{mood}}
- Current Physical Symptoms: {{physicalSymptoms}}

**Your Tasks:**

1.  **Predict Next Period:**
    *   First, calculate the average cycle length from the provided pastCycleData. A cycle is the time from the start of one period to the start of the next.
    *   Based on this average, predict the predictedStartDate of the next menstrual cycle by adding the average cycle length to the start date of the most recent period. A typical cycle is 28-32 days, but you must use the user's historical average.
    *   Provide a confidence score (0-1). Confidence should be higher for users with very regular cycles.
    *   Provide your reasoning, explaining the average cycle length you calculated and how you used it for the prediction.

2.  **Analyze Menstrual Health:** Provide a healthAnalysis. This is crucial.
    *   **Cycle Regularity:** Analyze the cycle lengths. A normal cycle is 21-35 days. If cycles are consistently shorter or longer, or vary wildly, it's irregular. Mention this.
    *   **PCOS/PCOD Detection:** If you see a history of very irregular or missed periods (e.g., cycles longer than 35-40 days, or large variations), especially if combined with a medical history of PCOS, flag this. Mention symptoms like irregular periods. Suggest seeing a doctor.
    *   **Menopause Detection:** If the user is over 45-50 and has highly irregular or missed periods, consider mentioning that perimenopause or menopause can cause such changes.
    *   **Personalization:** Use the age and medicalHistory (e.g., Thyroid issues) to make your analysis more accurate. Thyroid issues can cause irregular periods.

3.  **Predict Flow Intensity:** Provide a day-by-day flowPrediction for the next cycle. A standard pattern is: Day 1: Medium, Day 2: Heavy, Day 3: Heavy, Day 4: Medium, Day 5: Light.

**Output Format:**
Provide your response in a clear JSON format. If there are no health concerns, the healthAnalysis can be a simple statement like "Your cycles appear to be regular and healthy."
"""

USE_CASE = UseCase.define(
    NAME,
    request=REQUEST,
    response=RESPONSE,
    prompt=PROMPT,
    description="Predicts the next period start date and analyzes menstrual health.",
    failure_message="Failed to get prediction from AI.",
)
