"""
Report Builder Module

Turns a scan's swap events into a Report: per-event lines, the mean
price and drop counts. Building a report has no side effects; callers
decide where the rendered text goes.
"""

from dataclasses import dataclass, field
from decimal import Context, Decimal, localcontext
from typing import Dict, List, Optional, Sequence, Tuple

from ..models import SwapEvent

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
_CONTEXT = Context(prec=60)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def mean_price(events: Sequence[SwapEvent]) -> Optional[Decimal]:
    """Unweighted mean of event prices, or None for an empty sequence."""
    if not events:
        return None
    with localcontext(_CONTEXT):
        return sum((event.price for event in events), Decimal(0)) / len(events)


def render_event(index: int, event: SwapEvent, base_symbol: str, quote_symbol: str) -> str:
    """Render one event as a block of lines, numbered from 1."""
    return "\n".join([
        f"Swap #{index}",
        f"Time: {event.timestamp.strftime(TIME_FORMAT)}",
        f"Tx hash: {event.transaction_hash}",
        f"Block: {event.block_number}",
        f"{base_symbol} amount: {event.amount_base:.8f}",
        f"{quote_symbol} amount: {event.amount_quote:.2f}",
        f"Price: 1 {base_symbol} = {event.price:.2f} {quote_symbol}",
    ])


@dataclass(frozen=True)
class Report:
    title: str
    base_symbol: str
    quote_symbol: str
    events: Tuple[SwapEvent, ...]
    lines: Tuple[str, ...]
    mean_price: Optional[Decimal]
    dropped_logs: int = 0
    drop_reasons: Dict[str, int] = field(default_factory=dict)

    @property
    def event_count(self) -> int:
        return len(self.events)

    def render(self) -> str:
        """Render the report as text. This is also the prompt payload for commentary."""
        parts = [
            f"=== {self.title} ===",
            f"Found {_plural(self.event_count, 'event')}",
        ]
        for line in self.lines:
            parts.append("")
            parts.append(line)
        if self.mean_price is not None:
            parts.append("")
            parts.append(f"Average price: 1 {self.base_symbol} = {self.mean_price:.2f} {self.quote_symbol}")
        if self.dropped_logs:
            reasons = ", ".join(f"{name}: {count}" for name, count in sorted(self.drop_reasons.items()))
            suffix = f" ({reasons})" if reasons else ""
            parts.append(f"Dropped logs: {self.dropped_logs}{suffix}")
        return "\n".join(parts) + "\n"

    def to_dict(self) -> Dict:
        """Machine-readable summary; decimals are kept as strings."""
        return {
            'title': self.title,
            'event_count': self.event_count,
            'mean_price': str(self.mean_price) if self.mean_price is not None else None,
            'dropped_logs': self.dropped_logs,
            'drop_reasons': dict(self.drop_reasons),
            'events': [
                {
                    'transaction_hash': event.transaction_hash,
                    'block_number': event.block_number,
                    'timestamp': event.timestamp.strftime(TIME_FORMAT),
                    'sender': event.sender,
                    'recipient': event.recipient,
                    'amount_base': str(event.amount_base),
                    'amount_quote': str(event.amount_quote),
                    'price': str(event.price),
                }
                for event in self.events
            ],
        }


def summarize(events: Sequence[SwapEvent], dropped_logs: int = 0, drop_reasons: Optional[Dict[str, int]] = None,
              base_symbol: str = "WETH", quote_symbol: str = "USDC",
              window_minutes: Optional[int] = None) -> Report:
    """
    Build a report for an ordered sequence of swap events.

    Args:
        events: Decoded events in retrieval order
        dropped_logs: Number of logs skipped while decoding
        drop_reasons: Dropped log counts keyed by reason
        base_symbol: Label of the base asset
        quote_symbol: Label of the quote asset
        window_minutes: Scan window, shown in the title when known

    Returns:
        Report value; the mean price is None when there are no events
    """
    events = tuple(events)
    window = f" in the last {window_minutes} minutes" if window_minutes is not None else ""
    lines: List[str] = [
        render_event(i, event, base_symbol, quote_symbol)
        for i, event in enumerate(events, 1)
    ]
    return Report(
        title=f"Uniswap V3 {base_symbol}/{quote_symbol} swaps{window}",
        base_symbol=base_symbol,
        quote_symbol=quote_symbol,
        events=events,
        lines=tuple(lines),
        mean_price=mean_price(events),
        dropped_logs=dropped_logs,
        drop_reasons=dict(drop_reasons or {}),
    )
