from src.mac_attendance.mac_attendance.attendance.normalizer import normalize_mac, normalize_macs


def test_normalize_trims_upcases_dedupes_and_drops_empty():
    assert normalize_macs([" aa:bb ", "AA:BB", ""]) == ["AA:BB"]


def test_normalize_keeps_first_seen_order():
    raw = ["cc:03", "aa:01", " CC:03", "bb:02", "aa:01 "]

    assert normalize_macs(raw) == ["CC:03", "AA:01", "BB:02"]


def test_normalize_all_blank_yields_empty():
    assert normalize_macs(["", "   ", "\t"]) == []
    assert normalize_macs([]) == []


def test_normalize_ignores_non_string_items():
    assert normalize_macs([None, 42, {"mac": "x"}, "de:ad"]) == ["DE:AD"]
    assert normalize_mac(None) == ""
