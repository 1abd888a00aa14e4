from __future__ import annotations

from prometheus_client import Counter

# Mission applications by outcome: accepted | duplicate | mission_not_found | error
APPLICATIONS = Counter(
    "nanushi_mission_applications_total",
    "Mission application submissions by outcome",
    ["outcome"],
)

# Waitlist joins by outcome: joined | already_exists | error
WAITLIST_JOINS = Counter(
    "nanushi_waitlist_joins_total",
    "Waitlist join attempts by outcome",
    ["outcome"],
)

# Transactional email sends by template and outcome (sent | failed)
EMAILS = Counter(
    "nanushi_emails_total",
    "Transactional email send attempts",
    ["template", "outcome"],
)

# Content lookups by collection and outcome (found | not_found | error)
CONTENT_LOOKUPS = Counter(
    "nanushi_content_lookups_total",
    "Content resolver lookups",
    ["collection", "outcome"],
)
