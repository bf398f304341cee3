"""Using the services without Flask: print who is on each roster for a date.

Run from the repository root: ``python examples/example_usage.py 2024-03-10``
"""
import importlib
import sys

from config import get_settings_module

from src.worship_log.worship_log.container import build_container


def main(day: str) -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    for cls in container.class_service.list_classes():
        names = [s.name for s in container.roster_service.class_roster(cls.class_id, day)]
        print(f"{cls.short_label}: {', '.join(names) or '-'}")

    friends = container.roster_service.new_friend_roster(day)
    print(f"새친구: {', '.join(s.name for s in friends) or '-'}")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "2024-03-10")
