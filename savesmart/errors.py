class NotFoundError(LookupError):
    resource = "Resource"

    def __init__(self, identifier: str, message: str = ""):
        self.identifier = identifier
        super().__init__(message or f"{self.resource} '{identifier}' not found")


class RecipeNotFoundError(NotFoundError):
    resource = "Recipe"


class MealPlanNotFoundError(NotFoundError):
    resource = "MealPlan"


class MealPlanDraftError(RuntimeError):
    """The plan-drafting model returned something that is not a usable plan."""


class InvalidArgumentError(ValueError):
    """A caller-supplied value was rejected before any lookup happened."""
