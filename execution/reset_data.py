"""Restore factory data: wipe stored collections and reload the seed set.

Run:
    python execution/reset_data.py --yes
"""

import sys

from gymfix.app import configure_logging, create_app


def reset(confirm: bool) -> bool:
    if not confirm:
        print("This discards every change. Re-run with --yes to confirm.")
        return False
    ctx = create_app()
    ctx.reset_to_defaults()
    print(f"Restored {len(ctx.repo.parts)} parts, {len(ctx.repo.jobs)} jobs, "
          f"{len(ctx.repo.clients)} clients, {len(ctx.repo.users)} users")
    return True


if __name__ == "__main__":
    configure_logging()
    sys.exit(0 if reset("--yes" in sys.argv[1:]) else 1)
