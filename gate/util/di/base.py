"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with a mock implementation the test suite can swap in
Component = Literal["persistence", "telegram"]


class ProviderBase(Provider):
    """Base for all DI providers.

    A provider class with no subclasses is used as is. A provider class
    with subclasses is a mockable component: its subclasses are the
    production and mock implementations, told apart by ``__is_mock__``.

    Attributes:
        __mock_component__: Component name of a mockable provider
        __is_mock__: Whether this is a mock implementation
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

    @classmethod
    def is_mockable(cls) -> bool:
        """Whether implementations of this provider are registered."""
        return bool(cls.__subclasses__())

    @classmethod
    def implementation(cls, use_mock: bool = False) -> type["ProviderBase"]:
        """Pick the provider class to instantiate.

        Args:
            use_mock: Select the mock implementation of a mockable provider

        Returns:
            Provider class (not instantiated)

        Raises:
            ValueError: If the requested implementation is not registered.
                Mock providers live in the test suite and are registered
                when it is imported.
        """
        if not cls.is_mockable():
            return cls

        for subclass in cls.__subclasses__():
            if subclass.__is_mock__ == use_mock:
                return subclass

        kind = "mock" if use_mock else "production"
        raise ValueError(f"No {kind} implementation for {cls.__mock_component__}")
