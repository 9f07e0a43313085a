from dataclasses import dataclass, field
from typing import List


@dataclass
class PopulationConfig:
    population_size: int = 100
    initial_infected: int = 2


@dataclass
class SimulationConfig:
    rounds_total: int = 10
    capacity_limited: bool = False


@dataclass
class TransmissionConfig:
    probability: float = 0.3
    rule: str = "any_contact"


@dataclass
class ScenarioConfig:
    initial_immune: int = 0
    locations: List[str] = field(default_factory=list)


@dataclass
class ExperimentConfig:
    name: str = "virus_alert"
    seed: int = 42
    replays: int = 100
    workers: int = 1
    immune_step: int = 10
    output_dir: str = "outputs"


@dataclass
class AppConfig:
    population: PopulationConfig = field(default_factory=PopulationConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    transmission: TransmissionConfig = field(
        default_factory=TransmissionConfig)
    scenario: ScenarioConfig = field(default_factory=ScenarioConfig)
    experiment: ExperimentConfig = field(default_factory=ExperimentConfig)
