from datetime import datetime, timezone
from decimal import Decimal

import pytest
from web3 import Web3

from swapscan.client.memory_client import InMemoryGateway
from swapscan.errors import GatewayError, MalformedLogError, ScanCancelled
from swapscan.pricing.event_decoder import SwapEventDecoder
from swapscan.uniswap.v3.scanner import CancelToken

from conftest import RECIPIENT, SENDER


@pytest.fixture
def decoder():
    return SwapEventDecoder(base_decimals=18, quote_decimals=6)


def test_decode_swap_log(decoder, gateway, swap_log):
    log = swap_log(amount_base="-1.5", amount_quote="4500.25", price="3000", block_number=900, log_index=3)
    event = decoder.decode(log, gateway)

    assert event.transaction_hash == log.transaction_hash
    assert event.block_number == 900
    assert event.timestamp == datetime(2024, 1, 1, 0, 10, tzinfo=timezone.utc)
    assert event.sender == Web3.to_checksum_address(SENDER)
    assert event.recipient == Web3.to_checksum_address(RECIPIENT)
    assert event.amount_base == Decimal("-1.5")
    assert event.amount_quote == Decimal("4500.25")
    assert abs(event.price - 3000) < Decimal("1e-6")
    assert gateway.block_requests == [900]


def test_decoding_is_idempotent(decoder, gateway, swap_log):
    log = swap_log()
    assert decoder.decode(log, gateway) == decoder.decode(log, gateway)


def test_zero_sqrt_price_decodes_to_zero_price(decoder, gateway, swap_log):
    event = decoder.decode(swap_log(sqrt_price_x96=0), gateway)
    assert event.price == 0


def test_decimals_come_from_the_decoder(gateway, swap_log):
    log = swap_log(amount_base="2", amount_quote="1")
    event = SwapEventDecoder(base_decimals=6, quote_decimals=6).decode(log, gateway)
    assert event.amount_base == Decimal(2) * Decimal(10) ** 12
    assert event.amount_quote == Decimal(1)


def test_two_topics_is_malformed(decoder, gateway, swap_log):
    log = swap_log()
    log = swap_log(topics=log.topics[:2], block_number=901, log_index=7)

    with pytest.raises(MalformedLogError) as excinfo:
        decoder.decode(log, gateway)

    assert excinfo.value.block_number == 901
    assert excinfo.value.log_index == 7
    assert "topics" in str(excinfo.value)
    # shape is checked before any ledger round-trip
    assert gateway.block_requests == []


def test_short_payload_is_malformed(decoder, gateway, swap_log):
    log = swap_log()
    with pytest.raises(MalformedLogError):
        decoder.decode(swap_log(data=log.data[:128]), gateway)


def test_payload_of_exactly_five_words_is_accepted(decoder, gateway, swap_log):
    log = swap_log()
    assert len(log.data) == 160
    decoder.decode(log, gateway)


def test_block_lookup_failure_is_a_gateway_error(decoder, timestamps, swap_log):
    gateway = InMemoryGateway(head=1000, timestamps=timestamps, failing_blocks=[900])
    with pytest.raises(GatewayError) as excinfo:
        decoder.decode(swap_log(block_number=900), gateway)
    assert excinfo.value.block_number == 900


def test_cancelled_token_stops_block_lookup(decoder, gateway, swap_log):
    token = CancelToken()
    token.cancel()
    with pytest.raises(ScanCancelled):
        decoder.decode(swap_log(), gateway, token)
    assert gateway.block_requests == []


def test_negative_decimals_rejected():
    with pytest.raises(ValueError):
        SwapEventDecoder(base_decimals=-1, quote_decimals=6)
