"""
Error taxonomy for the scenario engine.

All errors derive from ValueError so callers that only care about
"bad input" can catch one type.
"""


class ScenarioError(ValueError):
    """Base class for scenario engine errors."""

    pass


class UnknownParameter(ScenarioError):
    """Raised when a parameter name is not in OVERRIDE_RANGES or the categorical set."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown parameter: {name!r}")
        self.name = name


class InvalidEnumValue(ScenarioError):
    """Raised when a categorical value is not one of its declared variants."""

    def __init__(self, name: str, value: object, choices: tuple[str, ...]) -> None:
        super().__init__(
            f"Invalid {name}: {value!r}. Must be one of {', '.join(choices)}"
        )
        self.name = name
        self.value = value
        self.choices = choices


class InvalidOverrideValue(ScenarioError):
    """Raised when a numeric override is not a finite number."""

    def __init__(self, name: str, value: object) -> None:
        super().__init__(f"Invalid value for {name}: {value!r}. Expected a number")
        self.name = name
        self.value = value


class InvalidDistance(ScenarioError):
    """Raised when the race distance is not positive."""

    pass


class InvalidBasePace(ScenarioError):
    """Raised when the base pace is not positive."""

    pass


class DegenerateBaseline(ScenarioError):
    """Raised when the baseline predicted time is not positive."""

    pass
