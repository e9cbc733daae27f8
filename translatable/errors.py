"""Exceptions raised by translatable models."""


class UntranslatableAttributeError(Exception):
    """Raised when a translation operation targets an attribute that is not translatable."""

    def __init__(self, key, translatable):
        self.key = key
        self.translatable = list(translatable)
        super().__init__(
            f"Cannot translate attribute `{key}` as it's not one of the "
            f"translatable attributes: `{', '.join(self.translatable)}`"
        )

    @classmethod
    def make(cls, key, model):
        return cls(key, model.get_translatable_attributes())
