"""
Locust load script for the moving pricing API.

Simulates quote-form traffic:
- Price a randomized job via /api/v1/pricing/calculate
- Classify a day split via /api/v1/pricing/day-split
- Occasionally fetch /api/v1/pricing/catalog (form bootstrap)
- Occasionally send an invalid body to exercise the 422 path

Configure with env vars or Locust UI:
- HOST: pass via `--host http://localhost:8000`
- PRICING_INVALID_RATIO: share of calculate calls sent with a broken body (default 0.05)

Run:
  locust -f load/locustfile.py --host http://localhost:8000
"""

from __future__ import annotations

import os
import random
from typing import Dict, List

from locust import HttpUser, task, between, events
import logging


# --- Config -------------------------------------------------------------------

SERVICE_TYPES = ["Grab-n-Go", "Full Service", "White Glove", "Labor Only"]
BILLING_SERVICES = ["Moving", "Moving and Packing", "Full Service", "White Glove", "Load Only", "Labor Only"]
INVALID_RATIO = float(os.getenv("PRICING_INVALID_RATIO", "0.05") or 0.05)


# --- Helpers ------------------------------------------------------------------

def _random_job() -> Dict:
    tiers: List[int] = [random.randint(1, 3) for _ in range(random.randint(0, 3))]
    return {
        "serviceType": random.choice(SERVICE_TYPES),
        "billingService": random.choice(BILLING_SERVICES),
        "distanceMiles": round(random.uniform(0, 150), 1),
        "cubicFeet": random.choice([150, 400, 500, 900, 1200, 1800, 2500, 3817]),
        "handicaps": {
            "stairsFlights": random.randint(0, 3),
            "walkDistanceFt": random.choice([0, 50, 120, 300]),
            "hasElevator": random.random() < 0.2,
        },
        "emergencyWithin24h": random.random() < 0.1,
        "specialtyTiers": tiers,
    }


# --- Quote form profile -------------------------------------------------------

class QuoteFormUser(HttpUser):
    wait_time = between(0.5, 2.0)

    def on_start(self):
        self.client.get("/api/v1/pricing/catalog", name="/pricing/catalog")

    @task(8)
    def calculate(self):
        body = _random_job()
        expect_invalid = random.random() < INVALID_RATIO
        if expect_invalid:
            body["cubicFeet"] = -1
        with self.client.post(
            "/api/v1/pricing/calculate",
            json=body,
            name="/pricing/calculate",
            catch_response=True,
        ) as r:
            if expect_invalid and r.status_code == 422:
                r.success()
            elif not expect_invalid and r.status_code != 200:
                r.failure(f"unexpected status {r.status_code}")

    @task(3)
    def day_split(self):
        self.client.post(
            "/api/v1/pricing/day-split",
            json={"distanceMiles": round(random.uniform(0, 150), 1), "effectiveHours": round(random.uniform(1, 16), 2)},
            name="/pricing/day-split",
        )

    @task(1)
    def catalog(self):
        self.client.get("/api/v1/pricing/catalog", name="/pricing/catalog")


# --- Optional event hooks -----------------------------------------------------

@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    logging.getLogger("locust").info(f"Starting pricing load test (invalid ratio {INVALID_RATIO})")


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    logging.getLogger("locust").info("Test finished")
