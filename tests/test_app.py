from pathlib import Path

from streamlit.testing.v1 import AppTest

APP = str(Path(__file__).parent.parent / "src" / "fullmoonhouse" / "app.py")


def _markdown(at: AppTest) -> str:
    return "\n".join(m.value for m in at.markdown)


def test_defaults_are_tropical_aries_first_full_moon(clean_env):
    at = AppTest.from_file(APP, default_timeout=30).run()
    assert not at.exception
    assert at.radio[0].value == "Tropical"
    assert at.selectbox[0].value == 0
    assert at.selectbox[1].value == "2025-01-13"
    text = _markdown(at)
    # Cancer 23.98 from Aries rising
    assert "House 4" in text
    assert "Tropical Moon in Cancer" in text
    assert "symbol:" not in text
    assert at.expander[0].label == "More"


def test_switching_to_sidereal_recomputes(clean_env):
    at = AppTest.from_file(APP, default_timeout=30).run()
    at.radio[0].set_value("Sidereal").run()
    text = _markdown(at)
    # 113.98 - 24.1 = 89.88: Gemini, 3rd house, Punarvasu
    assert "House 3" in text
    assert "Sidereal Moon in Gemini" in text
    assert "7. Punarvasu — symbol: Quiver of arrows" in text


def test_changing_rising_sign_recomputes(clean_env):
    at = AppTest.from_file(APP, default_timeout=30).run()
    at.selectbox[0].set_value(3).run()
    assert "House 1" in _markdown(at)


def test_unreadable_data_source_shows_error(clean_env, tmp_path):
    clean_env.setenv("FULLMOONHOUSE_DATA_SOURCE", str(tmp_path))
    at = AppTest.from_file(APP, default_timeout=30).run()
    assert len(at.error) == 1
    assert "Could not load reference data" in at.error[0].value
    assert "House" not in _markdown(at)
