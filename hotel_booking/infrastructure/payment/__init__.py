from hotel_booking.infrastructure.payment.online_gateway import OnlineGatewayChannel, SecureBankPortal
from hotel_booking.infrastructure.payment.pos_terminal import ExternalPosTerminal, PosTerminalChannel

__all__ = [
    "ExternalPosTerminal",
    "OnlineGatewayChannel",
    "PosTerminalChannel",
    "SecureBankPortal",
]
