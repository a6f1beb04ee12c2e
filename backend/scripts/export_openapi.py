"""
Export OpenAPI schema to docs/api/ directory.

Generates both JSON and YAML versions of the OpenAPI specification
from the FastAPI application.

Usage:
    python scripts/export_openapi.py [output_dir]
"""

import json
import sys
from pathlib import Path

import yaml

# Add backend directory to path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

DEFAULT_OUTPUT_DIR = backend_dir.parent / "docs" / "api"


def export_openapi(output_dir: Path = DEFAULT_OUTPUT_DIR) -> tuple[Path, Path]:
    """
    Export OpenAPI schema to JSON and YAML files.

    Returns:
        Paths of the written JSON and YAML files
    """
    from ordermanagement.main import app

    openapi_schema = app.openapi()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / "openapi.json"
    yaml_path = output_dir / "openapi.yaml"

    with open(json_path, "w") as f:
        json.dump(openapi_schema, f, indent=2)
    print(f"OpenAPI JSON exported to: {json_path}")

    with open(yaml_path, "w") as f:
        yaml.safe_dump(openapi_schema, f, default_flow_style=False, sort_keys=False)
    print(f"OpenAPI YAML exported to: {yaml_path}")

    print("\nAPI Summary:")
    print(f"  Title: {openapi_schema['info']['title']}")
    print(f"  Version: {openapi_schema['info']['version']}")
    print(f"  Endpoints: {len(openapi_schema['paths'])}")
    print(f"  Schemas: {len(openapi_schema.get('components', {}).get('schemas', {}))}")

    return json_path, yaml_path


if __name__ == "__main__":
    export_openapi(Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_OUTPUT_DIR)
