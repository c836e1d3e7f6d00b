"""Helpers shared by CLI subcommands."""

import os

from ..core import Config, FeatureCollection

TOKEN_ENV = "MAPBOX_ACCESS_TOKEN"


def load_config(args) -> Config:
    """Resolve configuration once per invocation."""
    return Config(args.config) if getattr(args, 'config', None) else Config()


def load_dataset(args, config: Config) -> FeatureCollection:
    """Load --geojson, or the dataset selected by the config's dataset source."""
    path = getattr(args, 'geojson', None) or config.get_dataset_path()
    print(f"Dataset: {path}" + ("" if getattr(args, 'geojson', None)
                                else f" (source: {config.dataset_source})"))
    collection = FeatureCollection.load(path)
    print(f"✓ Loaded {len(collection)} features")
    return collection


def resolve_token(args) -> str:
    return getattr(args, 'token', None) or os.environ.get(TOKEN_ENV, "")


def pick(value, default):
    """Command-line value if given, else the configured default."""
    return default if value is None else value
