import random
from datetime import date, timedelta

from locust import HttpUser, between, task

# Datos de stayhub/infrastructure/in_memory/demo_data.py (también los carga scripts/seed_db.py)
GUEST_EMAILS = [f"guest{i}@stayhub.dev" for i in range(1, 21)]
ACCOMMODATION_IDS = [1, 2, 3]


class GuestUser(HttpUser):
    # Wait between 1 and 3 seconds between tasks
    wait_time = between(1, 3)

    def on_start(self):
        self.headers = {
            "X-User-Email": random.choice(GUEST_EMAILS),
            "Content-Type": "application/json",
        }

    @task(3)
    def book_contended_dates(self):
        """
        Many users racing for the same few weeks: most requests must end in
        409 DATE_CONFLICT, never in an overlapping booking.
        """
        start = date.today() + timedelta(days=random.randint(30, 44))
        payload = {
            "accommodation_id": random.choice(ACCOMMODATION_IDS),
            "check_in": f"{start.isoformat()}T15:00:00",
            "check_out": f"{(start + timedelta(days=random.randint(1, 4))).isoformat()}T11:00:00",
            "guest_count": 1,
        }
        with self.client.post(
            "/api/v1/reservations",
            json=payload,
            headers=self.headers,
            name="/api/v1/reservations",
            catch_response=True,
        ) as response:
            if response.status_code in (201, 409):
                response.success()

    @task(1)
    def check_availability(self):
        start = date.today() + timedelta(days=random.randint(30, 44))
        accommodation_id = random.choice(ACCOMMODATION_IDS)
        self.client.get(
            f"/api/v1/accommodations/{accommodation_id}/availability",
            params={
                "check_in": f"{start.isoformat()}T15:00:00",
                "check_out": f"{(start + timedelta(days=2)).isoformat()}T11:00:00",
            },
            name="/api/v1/accommodations/[id]/availability",
        )

    @task(1)
    def list_my_reservations(self):
        self.client.get("/api/v1/reservations", headers=self.headers, name="/api/v1/reservations [list]")
