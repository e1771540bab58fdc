import logging
from collections import defaultdict

import httpx

logger = logging.getLogger("wordfind")


async def send_notification(
    found: list[str],
    findable: list[str],
    board: list[list[str]],
    topic: str,
    ntfy_url: str = "https://ntfy.sh",
    words_per_group: int = 10,
    transport: httpx.AsyncBaseTransport | None = None,
):
    """Send a round summary to ntfy.sh. Best effort: failures are logged, not raised."""
    try:
        found_set = set(found)
        missed = [w for w in findable if w not in found_set]
        by_length: dict[int, list[str]] = defaultdict(list)
        for w in missed:
            by_length[len(w)].append(w)

        title = f"Wordfind - {len(found)} of {len(findable)} words"

        selected = []
        for length in sorted(by_length.keys(), reverse=True):
            selected.extend(by_length[length][:words_per_group])

        board_str = " / ".join("".join(row) for row in board)
        body = f"{board_str}\n\nFound: {', '.join(sorted(found)) or '-'}\nMissed: {', '.join(selected) or '-'}"

        async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
            resp = await client.post(
                f"{ntfy_url}/{topic}",
                content=body.encode("utf-8"),
                headers={
                    "Title": title,
                    "Tags": "hourglass",
                },
            )
            resp.raise_for_status()
            logger.info("Notification sent to %s/%s (status %d)", ntfy_url, topic, resp.status_code)

    except Exception as e:
        logger.error("Failed to send notification: %s", e)
