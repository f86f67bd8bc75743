# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

import logging
import re
from dataclasses import dataclass, field
from typing import List

import sanitag
from sanitag import AllowListPolicy, Sanitizer
from sanitag.exceptions import PolicyNotFoundError, RecursionLimitExceeded, ReservedNameError

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


# --- Policies can be plain callables or objects exposing sanitize(text) ---

class RedactEmails:
    pattern = re.compile(r"[\w.+-]+@[\w-]+\.[\w.]+")

    def sanitize(self, text: str) -> str:
        return self.pattern.sub("[redacted]", text)


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


# --- A model using a custom tag key ---

@dataclass
class Ticket:
    subject: str = field(default="", metadata={"clean": "spaces"})
    body: str = field(default="", metadata={"clean": "emails"})
    html_summary: str = field(default="", metadata={"clean": "headings"})
    related: List["Ticket"] = field(default_factory=list)


def main():
    sanitizer = Sanitizer(
        {
            "spaces": collapse_whitespace,
            "emails": RedactEmails(),
            "headings": AllowListPolicy(elements=("h1", "h2", "p")),
        },
        tag_key="clean",
    )
    logging.info("Configured %r", sanitizer)

    ticket = Ticket(
        subject="  Printer    on fire  ",
        body="Contact me at rick@citadel.example or morty@example.org",
        html_summary="<h1>Fire</h1><p>Send <b>help</b></p><script>x</script>",
        related=[Ticket(subject="  duplicate\tticket ")],
    )
    sanitizer.sanitize_value(ticket)
    logging.info("subject: %s", ticket.subject)
    logging.info("body:    %s", ticket.body)
    logging.info("summary: %s", ticket.html_summary)
    logging.info("related: %s", ticket.related[0].subject)

    logging.info("\n--- Error handling ---")
    try:
        sanitizer.add("-", collapse_whitespace)
    except ReservedNameError as e:
        logging.error("Caught expected error: %s", e)

    sanitizer.remove("emails")
    try:
        sanitizer.sanitize_value(Ticket(body="x@y.z"))
    except PolicyNotFoundError as e:
        logging.error("Caught expected error: %s", e)

    looped = Ticket(subject="loop")
    looped.related.append(looped)
    try:
        sanitizer.sanitize_value(looped)
    except RecursionLimitExceeded as e:
        logging.error("Caught expected error: %s", e)

    logging.info("\n--- Installing as the process-wide default ---")
    previous = sanitag.set_default(sanitizer)
    logging.info("spaces via default: %r", sanitag.sanitize_string("spaces", " a   b "))
    sanitag.set_default(previous)


if __name__ == "__main__":
    main()
