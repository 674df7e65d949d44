"""Pytest fixtures shared across unit and Django integration tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

SAMPLE_LSS = """<?xml version="1.0" encoding="UTF-8"?>
<Run version="1.7.0">
  <GameName>Celeste</GameName>
  <CategoryName>Any%</CategoryName>
  <AttemptCount>4</AttemptCount>
  <AttemptHistory>
    <Attempt id="1" started="01/01/2024 10:00:00" isStartedSynced="True" ended="01/01/2024 10:00:30" isEndedSynced="True" />
    <Attempt id="2" started="01/01/2024 10:05:00" isStartedSynced="True" ended="01/01/2024 10:06:00" isEndedSynced="True" />
    <Attempt id="3" started="01/01/2024 10:10:00" isStartedSynced="True" ended="01/01/2024 10:13:00" isEndedSynced="True">
      <PauseTime>00:00:20</PauseTime>
    </Attempt>
    <Attempt id="4" started="01/01/2024 10:20:00" isStartedSynced="True" ended="01/01/2024 10:25:00" isEndedSynced="True">
      <RealTime>00:05:00.0000000</RealTime>
    </Attempt>
  </AttemptHistory>
  <Segments>
    <Segment>
      <Name>Forsaken City</Name>
      <SegmentHistory>
        <Time id="-1">
          <RealTime>00:00:50.0000000</RealTime>
        </Time>
        <Time id="2">
          <RealTime>00:00:40.0000000</RealTime>
        </Time>
        <Time id="3">
          <RealTime>00:00:45.5000000</RealTime>
        </Time>
        <Time id="4">
          <RealTime>00:00:41.0000000</RealTime>
          <GameTime>00:00:39.2500000</GameTime>
        </Time>
      </SegmentHistory>
    </Segment>
    <Segment>
      <Name>Old Site</Name>
      <SegmentHistory>
        <Time id="3">
          <RealTime>00:01:10.0000000</RealTime>
        </Time>
        <Time id="4">
          <RealTime>00:01:05.0000000</RealTime>
        </Time>
      </SegmentHistory>
    </Segment>
    <Segment>
      <Name>Celestial Resort</Name>
      <SegmentHistory>
        <Time id="4">
          <RealTime>00:03:14.0000000</RealTime>
        </Time>
      </SegmentHistory>
    </Segment>
  </Segments>
</Run>
"""


@pytest.fixture
def sample_lss() -> str:
    """Return a small LiveSplit document with three segments and four attempts.

    Attempt 1 reaches no segment, attempt 2 reaches only the first, attempt 3
    reaches the first two, and attempt 4 completes the run.
    """

    return SAMPLE_LSS


@pytest.fixture
def sample_lss_path(tmp_path, sample_lss):
    """Write the sample document to a temporary `.lss` file."""

    path = tmp_path / "celeste.lss"
    path.write_text(sample_lss, encoding="utf-8")
    return path


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    The suite is runnable by intent:
    - `unit`: pure, fast tests with no Django machinery.
    - `integration`: tests touching Django views, commands, or file IO.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
