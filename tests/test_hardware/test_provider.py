"""Tests for the local information provider."""

from unittest.mock import patch

from sysdive.collectors.gateway import CATEGORY_QUERIES
from sysdive.hardware.models import BatteryInfo
from sysdive.hardware.provider import InfoProvider, LocalInfoProvider


class TestLocalInfoProvider:
    def test_implements_every_query(self):
        provider = LocalInfoProvider()
        assert isinstance(provider, InfoProvider)
        for _, method in CATEGORY_QUERIES:
            assert callable(getattr(provider, method))

    @patch("sysdive.hardware.detector.detect_disks", return_value=[])
    def test_timeout_passed_to_commands(self, mock_disks):
        LocalInfoProvider(command_timeout=0.5).disk_layout()
        mock_disks.assert_called_once_with(timeout=0.5)

    @patch("sysdive.hardware.detector.detect_battery", return_value=BatteryInfo(has_battery=False))
    def test_battery_delegates(self, mock_battery):
        assert LocalInfoProvider().battery().has_battery is False
