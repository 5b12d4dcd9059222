"""Pipeline configuration dataclasses"""
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional
import json
import os

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

TRUE_VALUES = {'1', 'true', 'yes', 'on'}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in TRUE_VALUES


@dataclass
class OrderingRule:
    """Category order for one output field"""
    field: str                          # Field to order: "group"
    levels: Optional[List[Any]] = None  # Explicit levels: ["low", "high"]
    from_metadata: Optional[str] = None  # Or first-seen order of this metadata column

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'OrderingRule':
        return cls(
            field=data['field'],
            levels=data.get('levels'),
            from_metadata=data.get('from_metadata'),
        )


@dataclass
class PivotConfig:
    """Complete pivot-with-metadata configuration"""
    id_columns: List[str] = field(default_factory=list)  # Carried through: ["id"]
    key_name: str = 'key'                # Receives measure column names
    value_name: str = 'value'            # Receives cell values
    metadata_key: Optional[str] = None   # Metadata key column, defaults to key_name
    orderings: List[OrderingRule] = field(default_factory=list)
    strict_join: bool = False            # Raise instead of dropping unmatched keys
    strict_ordering: bool = False        # Raise on values missing from an order

    @property
    def metadata_key_name(self) -> str:
        return self.metadata_key or self.key_name

    def to_dict(self) -> dict:
        return {
            'id_columns': self.id_columns,
            'key_name': self.key_name,
            'value_name': self.value_name,
            'metadata_key': self.metadata_key,
            'orderings': [o.to_dict() for o in self.orderings],
            'strict_join': self.strict_join,
            'strict_ordering': self.strict_ordering,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: dict) -> 'PivotConfig':
        defaults = cls.from_env()
        id_columns = data.get('id_columns', [])
        if isinstance(id_columns, str):
            id_columns = [id_columns]
        return cls(
            id_columns=list(id_columns),
            key_name=data.get('key_name', defaults.key_name),
            value_name=data.get('value_name', defaults.value_name),
            metadata_key=data.get('metadata_key'),
            orderings=[OrderingRule.from_dict(o) for o in data.get('orderings', [])],
            strict_join=data.get('strict_join', defaults.strict_join),
            strict_ordering=data.get('strict_ordering', defaults.strict_ordering),
        )

    @classmethod
    def from_json(cls, json_str: str) -> 'PivotConfig':
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def from_env(cls) -> 'PivotConfig':
        """Defaults from METAPIVOT_* environment variables."""
        return cls(
            key_name=os.getenv('METAPIVOT_KEY_NAME', 'key'),
            value_name=os.getenv('METAPIVOT_VALUE_NAME', 'value'),
            strict_join=_env_flag('METAPIVOT_STRICT_JOIN'),
            strict_ordering=_env_flag('METAPIVOT_STRICT_ORDERING'),
        )


def save_config(config: PivotConfig, path: str) -> None:
    """Write a configuration to a JSON file."""
    with open(path, 'w', encoding='utf-8') as f:
        f.write(config.to_json())


def load_config(path: str) -> PivotConfig:
    """Read a configuration from a JSON file."""
    with open(path, encoding='utf-8') as f:
        return PivotConfig.from_json(f.read())
