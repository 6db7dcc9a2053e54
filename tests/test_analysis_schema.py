import pytest

from resmo.schemas.analysis import ResumeAnalysisResult

from conftest import ANALYSIS_REPLY


@pytest.mark.parametrize(
    "raw, expected",
    [
        (4.5, 5),
        (5.5, 6),
        ("6.5", 7),
        (7.4, 7),
        ("8", 8),
        (9, 9),
    ],
)
def test_numbers_round_half_up(raw, expected):
    result = ResumeAnalysisResult.model_validate({**ANALYSIS_REPLY, "fit_score": raw, "experience_years": raw})

    assert result.fit_score == expected
    assert result.experience_years == expected
