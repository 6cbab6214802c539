"""Allow ``python -m skill_triggers``."""

from skill_triggers.cli import main

main()
