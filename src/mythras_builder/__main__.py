"""Generate a quick random character from the command line.

Usage:
    python -m mythras_builder --seed 7 --culture Nomadic --career Warrior
"""

from __future__ import annotations

import argparse

from mythras_builder.core.config import get_settings
from mythras_builder.core.exceptions import MythrasBuilderError
from mythras_builder.core.logging import configure_logging, get_logger
from mythras_builder.engine.dice import DiceRoller
from mythras_builder.engine.session import BuildSession
from mythras_builder.models.enums import GenerationMethod


logger = get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="mythras_builder", description=__doc__)
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible rolls")
    parser.add_argument("--culture", default=None, help="Culture key")
    parser.add_argument("--career", default=None, help="Career key")
    parser.add_argument("--age", default=None, help="Age category key")
    parser.add_argument("--json", action="store_true", help="Print the snapshot as JSON")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.json_logs)

    try:
        session = BuildSession(
            settings=settings,
            roller=DiceRoller(seed=args.seed),
            culture=args.culture,
            career=args.career,
            age=args.age,
        )
    except MythrasBuilderError as exc:
        logger.error("Could not start build", error=exc.message, **exc.details)
        return 1
    session.set_method(GenerationMethod.ROLL)
    session.roll_age()
    session.roll_starting_money()

    snapshot = session.snapshot()
    print(snapshot.model_dump_json(indent=2) if args.json else snapshot.to_summary())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
