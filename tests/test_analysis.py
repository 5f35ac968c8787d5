"""
Tests for the risk analysis payload.
"""
from wbs_estimator.domain.services import build_analysis_payload
from wbs_estimator.domain.services.analysis import summary_line
from wbs_estimator.modules import build_sample_project


class TestAnalysisPayload:
    """Tests for the flattened text handed to the summarizer."""

    def test_one_line_per_node(self):
        """Test depth-first lines with codes, names and totals."""
        payload = build_analysis_payload(build_sample_project().items)
        assert payload.splitlines() == [
            "1 General Conditions - 15000.00",
            "1.1 Mobilization - 5000.00",
            "1.2 Temporary Utilities - 10000.00",
            "2 Site Work - 12500.00",
            "2.1 Excavation - 12500.00",
        ]

    def test_summary_line(self):
        """Test a single line."""
        node = build_sample_project().items[1]
        assert summary_line(node) == "2 Site Work - 12500.00"

    def test_empty_tree(self):
        """Test that an empty estimate gives an empty payload."""
        assert build_analysis_payload(()) == ""
