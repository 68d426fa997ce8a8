#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

"""
Interactive local checklist harness (no HTTP).

Usage:
  python3 scripts/checklist_local.py

What it does:
- Drives one InspectionChecklistFlow from typed commands
- Prints each transition (accepted, action, reason) and the current items
- On /complete, runs the order save guard against the emitted snapshot
"""

from repairdesk.application.use_cases.free_text_picker import status_options
from repairdesk.application.use_cases.inspection_checklist import ChecklistResult, InspectionChecklistFlow
from repairdesk.application.use_cases.order_save_guard import OrderSaveGuard
from repairdesk.domain.entities.checklist import ITEM_STATUS_LABELS, ChecklistSnapshot
from repairdesk.domain.entities.session_context import SessionContext, UserRole


def _print_header() -> None:
    print("\nLocal Checklist Harness")
    print("-" * 60)
    print("Commands: /category <android|ios>, /set <item> <status>, /fill <status>,")
    print("          /show, /back, /complete, /new, /quit, /help")
    print("Statuses: " + ", ".join(o.id for o in status_options()))
    print("-" * 60)


def _print_result(result: ChecklistResult) -> None:
    line = f"accepted={result.accepted} action={result.action}"
    if result.reason:
        line += f" reason={result.reason}"
    print(line)


def _print_items(flow: InspectionChecklistFlow) -> None:
    session = flow.session
    if session.category is None:
        print("(no category selected)")
        return
    print(f"\n--- {session.category.value} ---")
    for item in flow.items:
        status = session.item_status.get(item.id)
        shown = ITEM_STATUS_LABELS[status] if status else "-"
        print(f"  {item.id:<20} {item.label:<28} {shown}")
    print(f"complete: {session.is_complete}")


def _print_save_check(snapshot: ChecklistSnapshot) -> None:
    context = SessionContext(user_id="local", role=UserRole.attendant, store_id="local")
    check = OrderSaveGuard().check(snapshot, {}, context)
    print("\n--- Save check ---")
    print(f"unset items: {len(snapshot.unset_items)}")
    print(f"reason: {check.reason}")
    if check.message:
        print(f"message: {check.message}")


def main() -> None:
    flow = InspectionChecklistFlow()
    _print_header()

    while True:
        try:
            user_text = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_text:
            continue

        parts = user_text.split()
        cmd = parts[0].lower()
        args = parts[1:]

        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            _print_header()
            continue
        if cmd == "/new":
            flow = InspectionChecklistFlow()
            print("New checklist started")
            continue
        if cmd == "/show":
            _print_items(flow)
            continue
        if cmd == "/category" and len(args) == 1:
            _print_result(flow.select_category(args[0]))
            _print_items(flow)
            continue
        if cmd == "/set" and len(args) == 2:
            _print_result(flow.set_item_status(args[0], args[1]))
            continue
        if cmd == "/fill" and len(args) == 1:
            for item in flow.items:
                flow.set_item_status(item.id, args[0])
            _print_items(flow)
            continue
        if cmd == "/back":
            _print_result(flow.go_back())
            continue
        if cmd == "/complete":
            result = flow.complete()
            _print_result(result)
            if result.snapshot is not None:
                _print_save_check(result.snapshot)
            continue

        print("Unknown command. Type /help.")


if __name__ == "__main__":
    main()
