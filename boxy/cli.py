"""Terminal chat against a running Boxy.ai server.

Commands: ``exit``/``quit`` leave, ``/clear`` empties the conversation.
"""

from __future__ import annotations

import argparse
import logging
from typing import Callable, Optional, Sequence

from boxy.session import ChatSession


EXIT_COMMANDS = {"exit", "quit"}


def run(session: ChatSession, read: Callable[[str], str] = input, write: Callable[[str], None] = print) -> None:
    while True:
        try:
            line = read("You: ")
        except (EOFError, KeyboardInterrupt):
            write("")
            return

        command = line.strip().lower()
        if command in EXIT_COMMANDS:
            return
        if command == "/clear":
            session.clear()
            write("(conversation cleared)")
            continue
        if not command:
            continue

        write("🤖 Thinking...")
        reply = session.send(line)
        if reply is None:
            write("(request failed, try again)")
        else:
            write(f"Boxy: {reply.text}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Chat with Boxy.ai from the terminal")
    parser.add_argument("--url", default="http://127.0.0.1:8000", help="Boxy.ai server URL")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="[%(asctime)s] %(levelname)s - %(message)s")

    session = ChatSession(args.url)
    try:
        run(session)
    finally:
        session.close()


if __name__ == "__main__":
    main()
