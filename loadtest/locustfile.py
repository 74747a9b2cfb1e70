"""Load testing script for the TMEP assistant using Locust.

Every query is a real LLM call with web search, so keep user counts low.

Run with: locust -f loadtest/locustfile.py --host=http://localhost:8000

Or headless mode:
    locust -f loadtest/locustfile.py --host=http://localhost:8000 \
           --headless -u 5 -r 1 -t 60s
"""

import random

from locust import HttpUser, between, task

# Sample questions for testing
TMEP_QUERIES = [
    "What constitutes a merely descriptive mark?",
    "When is a mark primarily merely a surname?",
    "What does TMEP 1202.01 say about trade dress?",
    "What specimens are acceptable for goods?",
    "How is likelihood of confusion determined?",
    "What is a disclaimer of unregistrable matter?",
    "When can a mark acquire distinctiveness under Section 2(f)?",
    "What are the requirements for an identification of goods?",
]


class AssistantUser(HttpUser):
    """Simulated browser session asking questions one at a time."""

    wait_time = between(2.0, 5.0)

    @task(10)
    def ask_json(self):
        """Ask through the JSON API."""
        self.client.post(
            "/api/query",
            json={"query": random.choice(TMEP_QUERIES)},
            name="/api/query",
        )

    @task(3)
    def ask_form(self):
        """Ask through the HTML form."""
        self.client.post(
            "/",
            data={"query": random.choice(TMEP_QUERIES)},
            name="/ (form)",
        )

    @task(2)
    def view_page(self):
        """Load the page."""
        self.client.get("/", name="/")

    @task(1)
    def blank_query(self):
        """Blank questions must be rejected without an LLM call."""
        with self.client.post(
            "/api/query",
            json={"query": "   "},
            name="/api/query (blank)",
            catch_response=True,
        ) as response:
            if response.status_code == 422:
                response.success()

    @task(1)
    def check_stats(self):
        """Check query statistics."""
        self.client.get("/api/stats", name="/api/stats")

    @task(1)
    def check_health(self):
        """Check health endpoint."""
        self.client.get("/health", name="/health")
