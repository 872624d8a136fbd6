import random
from datetime import date, timedelta

from locust import HttpUser, between, task

ROOM_IDS = [101, 102, 201, 202, 301, 401]


class BookingUser(HttpUser):
    # Wait between 1 and 3 seconds between tasks
    wait_time = between(1, 3)

    def on_start(self):
        self.national_id = f"{random.randint(100000000, 999999999)}V"

    def _stay(self):
        check_in = date.today() + timedelta(days=random.randint(1, 60))
        return check_in, check_in + timedelta(days=random.randint(1, 5))

    @task(3)
    def search_rooms(self):
        check_in, check_out = self._stay()
        self.client.get(
            "/api/v1/rooms/available",
            params={"check_in": check_in.isoformat(), "check_out": check_out.isoformat()},
            name="/api/v1/rooms/available",
        )

    @task(1)
    def book_and_cancel(self):
        """
        Books a random room online and cancels it right away.
        409 (room taken) and 402 (declined) are expected under contention.
        """
        check_in, check_out = self._stay()
        payload = {
            "guest": {
                "name": "Load Test Guest",
                "national_id": self.national_id,
                "phone": "+94770000000",
                "email": "load@example.com",
            },
            "room_id": random.choice(ROOM_IDS),
            "check_in": check_in.isoformat(),
            "check_out": check_out.isoformat(),
        }
        with self.client.post(
            "/api/v1/reservations/online",
            json=payload,
            name="/api/v1/reservations/online",
            catch_response=True,
        ) as response:
            if response.status_code in (201, 402, 409):
                response.success()
            else:
                response.failure(f"unexpected status {response.status_code}")
                return
        if response.status_code == 201:
            reservation_id = response.json()["reservation"]["id"]
            self.client.post(
                f"/api/v1/reservations/{reservation_id}/cancel",
                name="/api/v1/reservations/[id]/cancel",
            )
