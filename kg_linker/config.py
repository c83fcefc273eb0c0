from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class ComponentConfig:
    """Generic component configuration."""

    name: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class LinkerConfig:
    """Top-level linking pipeline configuration."""

    triple_store: ComponentConfig
    search_index: ComponentConfig
    disambiguator: ComponentConfig
    recognizer: ComponentConfig
    minter: ComponentConfig
    loader: ComponentConfig
    search_timeout: Optional[float] = None
    namespace: str = "example.org"

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "LinkerConfig":
        def build(section: str, default: str) -> ComponentConfig:
            entry = data.get(section)
            if entry is None:
                return ComponentConfig(name=default)
            if "name" not in entry:
                raise ValueError(f"Config section '{section}' is missing 'name'.")
            return ComponentConfig(name=entry["name"], params=entry.get("params", {}))

        timeout = data.get("search_timeout")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"search_timeout must be positive, got {timeout}")

        return LinkerConfig(
            triple_store=build("triple_store", "memory"),
            search_index=build("search_index", "bm25"),
            disambiguator=build("disambiguator", "greedy"),
            recognizer=build("recognizer", "simple"),
            minter=build("minter", "genid"),
            loader=build("loader", "text"),
            search_timeout=timeout,
            namespace=data.get("namespace", "example.org"),
        )
