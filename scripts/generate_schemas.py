"""Generate JSON schemas from Pydantic models and save to schemas/ directory."""

import json
from pathlib import Path

from graphview.config import RenderConfig
from graphview.kernel.model import Dataset


def generate_schemas():
    """Generate JSON schemas for the graph document and render config."""
    schemas_dir = Path(__file__).parent.parent / "schemas"
    schemas_dir.mkdir(exist_ok=True)

    # Graph document schema (validation side: accepts `links` or `edges`)
    dataset_schema = Dataset.model_json_schema(mode="validation")
    dataset_schema_path = schemas_dir / "graph_dataset.schema.json"
    with open(dataset_schema_path, 'w', encoding='utf-8') as f:
        json.dump(dataset_schema, f, indent=2, ensure_ascii=False)
    print(f"Generated: {dataset_schema_path}")

    # Render config schema
    config_schema = RenderConfig.model_json_schema()
    config_schema_path = schemas_dir / "render_config.schema.json"
    with open(config_schema_path, 'w', encoding='utf-8') as f:
        json.dump(config_schema, f, indent=2, ensure_ascii=False)
    print(f"Generated: {config_schema_path}")

    print("\nSchema generation complete!")


if __name__ == "__main__":
    generate_schemas()
