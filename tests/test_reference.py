import json

import httpx
import pytest

from fullmoonhouse.reference import (
    ReferenceDataError,
    build_reference_data,
    format_date_label,
    full_moon_dates,
    load_reference_data,
    parse_full_moons,
    parse_house_meanings,
    parse_nakshatras,
)

HOUSES = {str(h): f"house {h}" for h in range(1, 13)}
NAKSHATRAS = [
    {"index": i, "name": f"N{i}", "symbol": f"S{i}", "meaning": f"M{i}"} for i in range(27)
]
FULL_MOONS = [
    {"date": "2025-05-12", "tropical": {"sign": "Scorpio", "degree": 22.22, "time": "16:56"}},
    {"date": "2025-01-13", "tropical": {"sign": "Cancer", "degree": 23.98}},
]


def test_bundled_tables_are_complete(bundled):
    assert len(bundled.full_moons) == 12
    assert sorted(bundled.house_meanings, key=int) == [str(h) for h in range(1, 13)]
    assert [n.index for n in bundled.nakshatras] == list(range(27))
    assert bundled.nakshatras[0].name == "Ashwini"
    assert bundled.nakshatras[26].name == "Revati"


def test_full_moons_are_sorted_by_date():
    records = parse_full_moons(FULL_MOONS)
    assert [r.date for r in records] == ["2025-01-13", "2025-05-12"]
    assert records[0].tropical.time is None
    assert records[1].tropical.time == "16:56"


def test_find_full_moon():
    reference = build_reference_data(FULL_MOONS, HOUSES, NAKSHATRAS)
    assert reference.find_full_moon("2025-05-12").tropical.sign == "Scorpio"
    assert reference.find_full_moon("1999-01-01") is None


@pytest.mark.parametrize(
    "row",
    [
        {"date": "2025-13-40", "tropical": {"sign": "Leo", "degree": 1}},
        {"date": "2025-01-13", "tropical": {"sign": "Ophiuchus", "degree": 1}},
        {"date": "2025-01-13", "tropical": {"sign": "Leo", "degree": 30}},
        {"date": "2025-01-13", "tropical": {"sign": "Leo", "degree": -0.5}},
        {"date": "2025-01-13"},
    ],
)
def test_bad_full_moon_rows_are_rejected(row):
    with pytest.raises(ReferenceDataError):
        parse_full_moons([row])


def test_duplicate_dates_are_rejected():
    with pytest.raises(ReferenceDataError, match="duplicate"):
        parse_full_moons([FULL_MOONS[0], FULL_MOONS[0]])


def test_house_table_needs_all_twelve():
    partial = {k: v for k, v in HOUSES.items() if k != "7"}
    with pytest.raises(ReferenceDataError, match="7"):
        parse_house_meanings(partial)


def test_nakshatra_table_needs_27_in_order():
    with pytest.raises(ReferenceDataError):
        parse_nakshatras(NAKSHATRAS[:26])
    swapped = list(NAKSHATRAS)
    swapped[3], swapped[4] = swapped[4], swapped[3]
    with pytest.raises(ReferenceDataError, match="expected 3"):
        parse_nakshatras(swapped)


def test_load_from_directory(tmp_path):
    (tmp_path / "fullmoons.json").write_text(json.dumps(FULL_MOONS), encoding="utf-8")
    (tmp_path / "houses.json").write_text(json.dumps(HOUSES), encoding="utf-8")
    (tmp_path / "nakshatras.json").write_text(json.dumps(NAKSHATRAS), encoding="utf-8")
    reference = load_reference_data(tmp_path)
    assert full_moon_dates(reference) == ["2025-01-13", "2025-05-12"]


def test_missing_file_raises(tmp_path):
    with pytest.raises(ReferenceDataError, match="cannot read"):
        load_reference_data(tmp_path)


def test_load_from_url_fetches_all_three():
    tables = {
        "/data/fullmoons.json": FULL_MOONS,
        "/data/houses.json": HOUSES,
        "/data/nakshatras.json": NAKSHATRAS,
    }
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request.url.path)
        return httpx.Response(200, json=tables[request.url.path])

    reference = load_reference_data(
        "https://example.org/data/", transport=httpx.MockTransport(handler)
    )
    assert sorted(requested) == sorted(tables)
    assert len(reference.nakshatras) == 27


def test_http_error_becomes_reference_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    with pytest.raises(ReferenceDataError, match="cannot fetch"):
        load_reference_data("https://example.org/data", transport=httpx.MockTransport(handler))


def test_format_date_label():
    assert format_date_label("2025-01-13") == "Mon, Jan 13, 2025"
    assert format_date_label("2025-05-12") == "Mon, May 12, 2025"


@pytest.mark.parametrize("degree", [True, "15", None])
def test_degree_must_be_a_json_number(degree):
    row = {"date": "2025-01-13", "tropical": {"sign": "Leo", "degree": degree}}
    with pytest.raises(ReferenceDataError, match="degree must be a number"):
        parse_full_moons([row])


def test_house_meanings_are_read_only(bundled):
    with pytest.raises(TypeError):
        bundled.house_meanings["1"] = "rewritten"
    assert bundled.house_meanings["1"] != "rewritten"
