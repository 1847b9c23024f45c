#!/usr/bin/env python3
"""
Interactive console chat with the SIA Garmen agents.

Usage:
    python scripts/chat.py
    python scripts/chat.py --log-level DEBUG --dashboard

Commands inside the chat:
    /agents          list agents
    /use <KEY>       switch the active agent manually
    /dashboard       show the active agent's dashboard data
    /quit            exit
"""

import argparse
import asyncio
import json
import sys
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from loguru import logger
from infrastructure import config
from infrastructure.log import setup_logging
from agents import AGENTS, AgentKey, Role, build_agent
from services.dashboard_service import get_dashboard


def _render(message) -> str:
    if message.role is Role.SYSTEM:
        return f"  [{message.content}]"
    if message.role is Role.USER:
        return f"Anda: {message.content}"
    name = AGENTS[message.agent].name if message.agent else AGENTS[AgentKey.MAIN].name
    stamp = message.timestamp.strftime("%H:%M")
    return f"{name} ({stamp}):\n{message.content}"


def _print_dashboard(agent: AgentKey) -> None:
    print(json.dumps(get_dashboard(agent).to_dict(), indent=2, ensure_ascii=False))


async def _loop(show_dashboard: bool) -> None:
    orchestrator = build_agent()

    for message in orchestrator.messages:
        print(_render(message))

    while True:
        try:
            text = input(f"\nTanya {orchestrator.current_profile.short_name}... > ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        command = text.strip()
        if command == "/quit":
            break
        if command == "/agents":
            for profile in AGENTS.values():
                marker = "*" if profile.key is orchestrator.current_agent else " "
                print(f" {marker} {profile.key.value:<32} {profile.name} - {profile.description}")
            continue
        if command.startswith("/use "):
            try:
                orchestrator.select_agent(AgentKey(command.split(maxsplit=1)[1].strip().upper()))
            except ValueError:
                print("Agen tidak dikenal. Lihat /agents.")
            continue
        if command == "/dashboard":
            _print_dashboard(orchestrator.current_agent)
            continue

        result = await orchestrator.submit(text)
        for message in result.messages[1:]:
            print(_render(message))
        if show_dashboard and result.accepted:
            _print_dashboard(orchestrator.current_agent)

    orchestrator.close()


def main():
    parser = argparse.ArgumentParser(description="Chat with the SIA Garmen agents.")
    parser.add_argument("--log-level", default=None, help="loguru level (default: $SIA_LOG_LEVEL or INFO)")
    parser.add_argument("--log-file", default=None, help="optional rotating log file")
    parser.add_argument("--dashboard", action="store_true", help="print dashboard data after each reply")
    args = parser.parse_args()

    setup_logging(args.log_level, log_file=args.log_file)

    try:
        config.validate()
    except ValueError as e:
        logger.error(str(e))
        return 1

    config.dump()
    asyncio.run(_loop(args.dashboard))
    return 0


if __name__ == '__main__':
    sys.exit(main())
