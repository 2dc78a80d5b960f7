"""Exception types raised at the library boundaries."""


class AlchemistError(Exception):
    """Base class for Data Alchemist errors."""


class LoadError(AlchemistError):
    """An uploaded file could not be decoded.

    The message is deliberately generic; the underlying exception is
    chained as ``__cause__``.
    """

    def __init__(self, file_name: str = ""):
        self.file_name = file_name
        label = f" '{file_name}'" if file_name else ""
        super().__init__(f"Failed to process uploaded file{label}")


class RuleError(AlchemistError, KeyError):
    """Unknown rule id in the rule registry."""

    def __init__(self, rule_id: str):
        self.rule_id = rule_id
        super().__init__(f"Unknown rule: {rule_id}")

    def __str__(self):
        return self.args[0]
