"""Entidad Guest - huésped del hotel."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Guest:
    """
    Huésped identificado por su documento nacional (NIC).

    Una vez referenciado por una reservación sólo cambian los datos de
    contacto.
    """

    id: int | None = None
    name: str = ""
    national_id: str = ""
    phone: str = ""
    email: str | None = None
    address: str | None = None
    created_at: datetime | None = None

    @property
    def has_email(self) -> bool:
        return bool(self.email and self.email.strip())

    def update_contact(
        self,
        phone: str | None = None,
        email: str | None = None,
        address: str | None = None,
    ) -> bool:
        """Actualiza los campos de contacto. Retorna True si algo cambió."""
        changed = False
        if phone and phone != self.phone:
            self.phone = phone
            changed = True
        if email and email != self.email:
            self.email = email
            changed = True
        if address and address != self.address:
            self.address = address
            changed = True
        return changed
