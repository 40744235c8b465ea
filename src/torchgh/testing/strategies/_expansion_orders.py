import hypothesis.strategies


def expansion_orders(
    min_value: int = 2,
    max_value: int = 12,
) -> hypothesis.strategies.SearchStrategy[int]:
    """Strategy for valid expansion orders."""
    return hypothesis.strategies.integers(
        min_value=min_value,
        max_value=max_value,
    )
