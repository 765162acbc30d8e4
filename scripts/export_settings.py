"""Export the environment variables understood by the API as JSON.

Usage:
    python scripts/export_settings.py [output.json]

Writes docs/env-vars.json by default.
"""

import json
import sys
from pathlib import Path
from typing import Type

from pydantic_core import PydanticUndefined
from pydantic_settings import BaseSettings

root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path / "src" / "api"))

from infrastructure.settings import (  # noqa: E402
    DynamoDBSettings,
    Settings,
    SitesSettings,
)


def get_model_metadata(settings_class: Type[BaseSettings]) -> dict:
    prefix = settings_class.model_config.get("env_prefix", "")
    properties = []

    for name, field in settings_class.model_fields.items():
        type_name = getattr(field.annotation, "__name__", str(field.annotation))
        default = field.get_default()

        # Explicit None defaults are optional, not required
        is_required = default is PydanticUndefined

        if is_required or default is None:
            display_default = None
        elif isinstance(default, (bool, int, float)):
            display_default = default
        else:
            display_default = str(default)

        properties.append(
            {
                "env_var": f"{prefix}{name.upper()}",
                "type": type_name,
                "default": display_default,
                "required": is_required,
                "description": field.description or "",
            }
        )

    return {
        "class_name": settings_class.__name__,
        "prefix": prefix,
        "doc": settings_class.__doc__ or "",
        "properties": properties,
    }


def export_settings(output_path: Path) -> None:
    classes = [Settings, DynamoDBSettings, SitesSettings]

    data = {cls.__name__: get_model_metadata(cls) for cls in classes}

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)

    print(f"Exported settings to {output_path}")


if __name__ == "__main__":
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else root_path / "docs" / "env-vars.json"
    export_settings(target)
