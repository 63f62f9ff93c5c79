"""Age-appropriate baby nutrition advice and a simple recipe."""

from src.domain.schema import Schema, number, obj, string
from src.domain.use_case import UseCase

NAME = "baby-nutrition-recipe"

REQUEST = Schema(
    number("babyAgeInMonths", "The baby's age in months."),
)

RESPONSE = Schema(
    string(
        "essentialNutrients",
        "A summary of essential nutrients, vitamins, and minerals for the baby's age, "
        "formatted as a bulleted list.",
    ),
    string(
        "dietSuggestions",
        "Dietary suggestions and foods to introduce at this age, formatted as a bulleted list.",
    ),
    obj(
        "simpleRecipe",
        string("name", "The name of a simple, age-appropriate recipe."),
        string("ingredients", "A bulleted list of ingredients for the recipe."),
        string("instructions", "A numbered list of simple instructions to make the recipe."),
        description="A simple recipe suitable for the baby's age.",
    ),
)

PROMPT = """\
You are an expert pediatric nutritionist. A mother is asking for nutrition advice for her baby who is {{{babyAgeInMonths}}} months old.

**Your Task:**
Provide clear, safe, and age-appropriate nutritional information.

1.  **Essential Nutrients:** Based on the baby's age, list the most important nutrients, vitamins, and minerals. Format as a bulleted list.
2.  **Diet Suggestions:** Suggest foods that are appropriate to introduce at this age. Format as a bulleted list.
3.  **Simple Recipe:** Provide one simple, nutritious, and easy-to-make recipe. The recipe should have a name, a bulleted list of ingredients, and numbered instructions.

**Age-Specific Guidance:**
- **0-6 months:** Focus on exclusive breastfeeding or formula. Nutrients are delivered through milk. Do not suggest solid foods.
- **6-9 months:** Introduce single-ingredient purees (e.g., avocado, sweet potato, banana). Focus on iron-rich foods.
- **9-12 months:** Introduce mashed foods, small soft pieces, and more variety. Encourage self-feeding.
- **12+ months:** Transition to family meals (with no salt/sugar), cow's milk. Focus on a balanced diet.

Generate the response based on the baby's age of **{{{babyAgeInMonths}}} months**.
"""

USE_CASE = UseCase.define(
    NAME,
    request=REQUEST,
    response=RESPONSE,
    prompt=PROMPT,
    description="Essential nutrients, diet suggestions and a recipe for a baby's age.",
    failure_message="Failed to get baby nutrition advice from AI.",
)
