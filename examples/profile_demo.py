# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import sanitag
from sanitag import policy_field
from sanitag.exceptions import SanitagError

# Basic logging setup
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


# --- A small user-generated-content model ---

@dataclass
class Link:
    label: str = policy_field("strict", default="")
    # Trusted, server-generated; never rewritten.
    url: str = field(default="", metadata={"sanitize": "-"})


@dataclass
class Comment:
    author: str = policy_field("strict", default="")
    body: str = policy_field("ugc", default="")


@dataclass
class Profile:
    name: str = policy_field("strict", default="")
    bio: str = policy_field("ugc", default="")
    links: List[Link] = field(default_factory=list)
    pinned: Optional[Comment] = None
    comments_by_id: Dict[int, Comment] = field(default_factory=dict)
    internal_note: str = ""


def build_profile() -> Profile:
    return Profile(
        name="<script>steal()</script>Rick <b>Sanchez</b>",
        bio='<p onclick="x()">Scientist. <a href="javascript:alert(1)">me</a> '
            '<a href="https://example.com">site</a></p>',
        links=[Link(label="<i>blog</i>", url="https://example.com/?q=<raw>")],
        pinned=Comment(author="<u>Morty</u>", body="<b>Aw geez</b><iframe src=x></iframe>"),
        comments_by_id={7: Comment(author="Summer", body="<em>ok</em><style>*{}</style>")},
        internal_note="<b>untouched</b>",
    )


async def main():
    profile = build_profile()

    logging.info("--- Synchronous sanitize_value ---")
    sanitag.sanitize_value(profile)
    logging.info("name:          %s", profile.name)
    logging.info("bio:           %s", profile.bio)
    logging.info("link label:    %s (url kept: %s)", profile.links[0].label, profile.links[0].url)
    logging.info("pinned:        %s / %s", profile.pinned.author, profile.pinned.body)
    logging.info("comment 7:     %s", profile.comments_by_id[7].body)
    logging.info("internal note: %s", profile.internal_note)

    logging.info("\n--- Async variant ---")
    other = build_profile()
    await sanitag.asanitize_value(other)
    logging.info("name: %s", other.name)

    logging.info("\n--- Single strings ---")
    logging.info("strict: %s", sanitag.sanitize_string("strict", "<h1>Title</h1>"))
    logging.info("ugc:    %s", sanitag.sanitize_string("ugc", "<h1>Title</h1><b>bold</b>"))

    logging.info("\n--- Unknown policy ---")
    try:
        sanitag.sanitize_string("markdown", "*hi*")
    except SanitagError as e:
        logging.error("Caught expected error: %s", e)


if __name__ == "__main__":
    asyncio.run(main())
