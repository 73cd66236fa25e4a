"""Generate JSON schemas from Pydantic models and save to schemas/ directory."""

import json
from pathlib import Path

from injectgraph.kernel.config import GraphConfig
from injectgraph.kernel.facts import FactsDocument
from injectgraph.kernel.model import Graph


def generate_schemas():
    """Generate JSON schemas for the facts input, graph output and config."""
    schemas_dir = Path(__file__).parent.parent / "schemas"
    schemas_dir.mkdir(exist_ok=True)

    targets = [
        (FactsDocument, "class_facts.schema.json"),
        (Graph, "graph.schema.json"),
        (GraphConfig, "graph_config.schema.json"),
    ]
    for model, filename in targets:
        schema = model.model_json_schema(by_alias=True)
        schema_path = schemas_dir / filename
        with open(schema_path, 'w', encoding='utf-8') as f:
            json.dump(schema, f, indent=2, ensure_ascii=False)
        print(f"Generated: {schema_path}")

    print("\nSchema generation complete!")


if __name__ == "__main__":
    generate_schemas()
