import random
import unittest
from decimal import Decimal
from unittest.mock import MagicMock

from pybreaker import CircuitBreakerState

from hotel_booking.domain.entities.payment import TransactionKind
from hotel_booking.domain.errors import InvalidMoneyError
from hotel_booking.infrastructure.circuit_breaker import build_gateway_breaker
from hotel_booking.infrastructure.payment import (
    ExternalPosTerminal,
    OnlineGatewayChannel,
    PosTerminalChannel,
    SecureBankPortal,
)


class TestPosTerminalChannel(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.channel = PosTerminalChannel(ExternalPosTerminal(decline_rate=0.0))

    async def test_charge_success(self):
        self.assertTrue(await self.channel.charge(Decimal("300.00")))
        transaction = self.channel.last_transaction
        self.assertTrue(transaction.transaction_id.startswith("POS_"))
        self.assertEqual(len(transaction.transaction_id), len("POS_") + 12)
        self.assertIn(transaction.transaction_id, self.channel.describe())

    async def test_charge_declined(self):
        channel = PosTerminalChannel(ExternalPosTerminal(decline_rate=1.0))
        transaction = await channel.charge_transaction(Decimal("300.00"))
        self.assertFalse(transaction.success)
        self.assertIsNone(transaction.transaction_id)
        self.assertEqual(channel.describe(), "POS Terminal | Transaction ID: N/A")

    async def test_invalid_amount_never_reaches_terminal(self):
        terminal = MagicMock()
        channel = PosTerminalChannel(terminal)
        with self.assertRaises(InvalidMoneyError):
            await channel.charge(Decimal("0"))
        terminal.authorize.assert_not_called()

    async def test_refund(self):
        self.assertTrue(await self.channel.refund("POS_ABC", Decimal("10.00")))
        self.assertEqual(self.channel.last_transaction.kind, TransactionKind.REFUND)

    async def test_seeded_decline_rate_is_reproducible(self):
        def outcomes(seed):
            terminal = ExternalPosTerminal(decline_rate=0.5, rng=random.Random(seed))
            return [terminal.authorize(Decimal("1")) for _ in range(20)]

        self.assertEqual(outcomes(3), outcomes(3))


class TestOnlineGatewayChannel(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.portal = SecureBankPortal(base_url="https://bank.example/pay", decline_rate=0.0)
        self.channel = OnlineGatewayChannel(portal=self.portal, breaker=build_gateway_breaker(fail_max=2))

    async def test_charge_generates_payment_link(self):
        transaction = await self.channel.charge_transaction(Decimal("300.00"))
        self.assertTrue(transaction.success)
        self.assertTrue(transaction.transaction_id.startswith("GW_"))
        self.assertTrue(transaction.payment_link.startswith("https://bank.example/pay?amount=300.00"))
        self.assertEqual(self.channel.last_payment_link, transaction.payment_link)

    async def test_portal_failures_open_the_circuit(self):
        broken = MagicMock()
        broken.generate_payment_link.side_effect = ConnectionError("portal down")
        breaker = build_gateway_breaker(fail_max=2, reset_timeout=60)
        channel = OnlineGatewayChannel(portal=broken, breaker=breaker)

        with self.assertRaises(ConnectionError):
            await channel.charge_transaction(Decimal("10.00"))

        # the failure that trips the breaker is reported as unavailable
        tripped = await channel.charge_transaction(Decimal("10.00"))
        self.assertFalse(tripped.success)
        self.assertEqual(tripped.reason, "payment gateway unavailable")
        self.assertEqual(breaker.current_state, CircuitBreakerState.OPEN)

        await channel.charge_transaction(Decimal("10.00"))
        self.assertEqual(broken.generate_payment_link.call_count, 2)

    async def test_refund_through_portal(self):
        self.assertTrue(await self.channel.refund("GW_ABC", Decimal("10.00")))
        self.assertTrue(self.channel.issued("GW_ABC"))
        self.assertFalse(self.channel.issued("POS_ABC"))
