import random
import uuid


def generate_id(prefix: str, rng: random.Random) -> str:
    """Build ``<prefix>-<uuid4>`` from ``rng`` so seeded runs repeat their ids."""
    return f'{prefix}-{uuid.UUID(int=rng.getrandbits(128), version=4)}'
