from omegaconf import OmegaConf


def make_invalid_config() -> OmegaConf:
    """Return a config with more immune players than players."""

    cfg = OmegaConf.create(
        {
            "population": {
                "population_size": 10,
                "initial_infected": 1,
            },
            "simulation": {
                "rounds_total": 10,
                "capacity_limited": False,
            },
            "transmission": {
                "probability": 0.3,
                "rule": "any_contact",
            },
            "scenario": {
                "initial_immune": 11,
                "locations": ["bakery"],
            },
            "experiment": {
                "name": "invalid",
                "seed": 1,
                "replays": 10,
                "workers": 1,
                "immune_step": 1,
                "output_dir": "outputs",
            },
        }
    )
    return cfg
