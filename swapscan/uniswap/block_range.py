"""
Resolve "the last N minutes" into a starting block height.
"""


def blocks_in_window(window_minutes: int, seconds_per_block: int) -> int:
    """Number of blocks produced in the window, rounded up."""
    if seconds_per_block <= 0:
        raise ValueError(f"seconds_per_block must be positive, got {seconds_per_block}")
    if window_minutes < 0:
        raise ValueError(f"window_minutes must not be negative, got {window_minutes}")
    return -(-(window_minutes * 60) // seconds_per_block)


def resolve_start_block(current_height: int, window_minutes: int, seconds_per_block: int) -> int:
    """
    Get the block height roughly `window_minutes` before `current_height`.

    Saturates at the genesis block when the chain is younger than the window.

    Args:
        current_height: Latest block number
        window_minutes: Length of the window in minutes
        seconds_per_block: Average block interval in seconds

    Returns:
        Starting block number (never negative)
    """
    window_blocks = blocks_in_window(window_minutes, seconds_per_block)
    if current_height > window_blocks:
        return current_height - window_blocks
    return 0
