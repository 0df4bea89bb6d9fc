import logging
import math

import pytest
from stress_sim import setup_logging
from stress_sim.config import EngineConfig
from stress_sim.core import deformation_factor, deforms, total_weight
from stress_sim.types import Body, Cuboid


def test_defaults():
    cfg = EngineConfig()
    assert cfg.force_scale == 1e8
    assert cfg.gravity == 9.81
    assert cfg.support_eps == 0.1
    assert cfg.alignment_threshold == 0.7
    assert cfg.deformation_scale == 5.0


def test_from_env(monkeypatch):
    monkeypatch.setenv("STRESS_SIM_FORCE_SCALE", "2e8")
    monkeypatch.setenv("STRESS_SIM_GRAVITY", " 1.62 ")
    monkeypatch.setenv("STRESS_SIM_SUPPORT_EPS", "")
    monkeypatch.delenv("STRESS_SIM_DEFORMATION_SCALE", raising=False)
    cfg = EngineConfig.from_env()
    assert cfg.force_scale == 2e8
    assert cfg.gravity == 1.62
    assert cfg.support_eps == 0.1
    assert cfg.deformation_scale == 5.0


def test_from_env_rejects_garbage(monkeypatch):
    monkeypatch.setenv("STRESS_SIM_GRAVITY", "down")
    with pytest.raises(ValueError, match="STRESS_SIM_GRAVITY"):
        EngineConfig.from_env()


def test_deformation_factor():
    assert deformation_factor(0.5, 5.0) == pytest.approx(1.25)
    assert deformation_factor(0.0, 5.0) == 1.0
    assert deformation_factor(math.inf, 5.0) == 1.0
    assert deformation_factor(math.nan, 5.0) == 1.0
    assert not deforms(Body(Cuboid((0.5, 0.5, 0.5)), boundary="fixed"))
    assert deforms(Body(Cuboid((0.5, 0.5, 0.5)), boundary="pinned"))


def test_total_weight():
    bodies = [Body(Cuboid((0.5, 0.5, 0.5))), Body(Cuboid((0.5, 0.5, 0.5)), material="wood")]
    assert total_weight(bodies) == pytest.approx((7850.0 + 600.0) * 9.81)


def test_setup_logging(tmp_path):
    log_file = tmp_path / "run.log"
    logger = setup_logging(logging.DEBUG, log_file=str(log_file))
    try:
        assert logger.name == "stress_sim"
        assert len(logger.handlers) == 2
        # Calling again replaces handlers.
        assert len(setup_logging(logging.DEBUG, log_file=str(log_file)).handlers) == 2

        logging.getLogger("stress_sim.engine").info("hello from the engine")
        for h in logger.handlers:
            h.flush()
        assert "hello from the engine" in log_file.read_text(encoding="utf-8")
    finally:
        for h in list(logger.handlers):
            h.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
