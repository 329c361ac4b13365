"""Example: drive the shift editing session without Flask.

Goal: show that controllers are a thin layer; the screen logic lives in the session.
"""

import importlib

from config import get_settings_module

from src.hms_client.hms_client.container import build_container
from src.hms_client.hms_client.core.enums import Role


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(api_config=settings.API_CONFIG)

    editor = container.new_shift_session(role=Role.ADMIN)
    editor.property_changed.connect(lambda sender, name: print("changed:", name), weak=False)

    print(editor.load())
    editor.input_date = "2024-05-01"
    editor.input_start_text = "08:00"
    editor.input_end_text = "16:00"
    print("can create:", editor.create_command.can_execute())
    print(editor.create_command.execute())


if __name__ == "__main__":
    main()
