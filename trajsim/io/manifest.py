"""
Manifest: parse a simulation manifest.yaml into a SimulationConfig.

Example manifest:

    type: psd
    noises: [0.5, 1.0]
    n: 10
    freq: 0.2
    end: 50
    seed: 42
    params:
      damp_params: [1.0, 0.1]
"""

from pathlib import Path
from typing import Any, Dict

import yaml

from trajsim.core.base import SimulationConfig
from trajsim.validation.arguments import InvalidArgument

MANIFEST_KEYS = {'type', 'noises', 'n', 'freq', 'end', 'seed', 'params'}


def resolve_manifest_path(data_path: str) -> Path:
    """
    Locate the manifest.

    Tries:
        1. data_path itself (if it's a .yaml file)
        2. data_path/manifest.yaml
    """
    p = Path(data_path)

    if p.is_file() and p.suffix in ('.yaml', '.yml'):
        manifest_path = p
    else:
        manifest_path = p / 'manifest.yaml'

    if not manifest_path.exists():
        raise FileNotFoundError(f"No manifest.yaml in {data_path}")

    return manifest_path


def parse_manifest(raw: Dict[str, Any]) -> SimulationConfig:
    """Build a validated SimulationConfig from a manifest dict."""
    if not isinstance(raw, dict):
        raise InvalidArgument(f"Manifest must be a mapping, got {type(raw).__name__}")

    unknown = sorted(set(raw) - MANIFEST_KEYS)
    if unknown:
        raise InvalidArgument(
            f"Unknown manifest key(s): {', '.join(unknown)}. "
            f"Allowed: {', '.join(sorted(MANIFEST_KEYS))}"
        )
    if 'type' not in raw:
        raise InvalidArgument("Manifest missing 'type'")

    params = raw.get('params') or {}
    if not isinstance(params, dict):
        raise InvalidArgument("Manifest 'params' must be a mapping")

    config = SimulationConfig(
        type=raw['type'],
        noises=raw.get('noises') or [],
        n=raw.get('n', 10),
        freq=raw.get('freq', 0.2),
        end=raw.get('end', 50),
        seed=raw.get('seed'),
        params=dict(params),
    )
    return config.validate()


def load_manifest(data_path: str) -> SimulationConfig:
    """Load and validate manifest.yaml from a file or directory."""
    manifest_path = resolve_manifest_path(data_path)

    with open(manifest_path) as f:
        raw = yaml.safe_load(f)

    return parse_manifest(raw)
