import os
from dataclasses import dataclass


def _positive_float(env, name, default):
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass
class Config:
    solver_timeout: float = 10.0
    testcases_dir: str = os.path.join("tests", "testcases")
    results_dir: str = "results"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, env=None):
        env = os.environ if env is None else env
        defaults = cls()
        return cls(
            solver_timeout=_positive_float(env, "SOLVER_TIMEOUT", defaults.solver_timeout),
            testcases_dir=env.get("SAT_TESTCASES") or defaults.testcases_dir,
            results_dir=env.get("SAT_RESULTS") or defaults.results_dir,
            log_level=(env.get("SAT_LOG_LEVEL") or defaults.log_level).upper(),
        )
