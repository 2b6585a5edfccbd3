"""Test container builder with selective unmocking."""

from dishka import AsyncContainer

from gate.util.di import MOCKABLE_COMPONENTS, Component
from gate.util.di.container import create_container


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build test container with selective unmocking.

    Settings are loaded from environment variables.

    Args:
        unmock: Components to use production implementations for.
                All others use their mocks.

    Returns:
        Configured test container

    Raises:
        ValueError: If unknown components are requested

    Examples:
        # Unit tests - all mocks
        container = build_test_container()

        # Integration tests - real persistence
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    unknown = unmock - MOCKABLE_COMPONENTS
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")

    return create_container(mocked=MOCKABLE_COMPONENTS - unmock)
