from startright.entries import (
    DISABLED_MARKER, RunValue, SourceKind, StartupEntry, build_location_key,
    decode_run_value, encode_run_value
)


def test_marker_is_eight_characters():
    assert DISABLED_MARKER == "REMOVED:"
    assert len(DISABLED_MARKER) == 8


def test_decode_enabled_value():
    assert decode_run_value(r'"C:\Tools\foo.exe"') == RunValue(r'"C:\Tools\foo.exe"', True)


def test_decode_disabled_value_strips_marker():
    assert decode_run_value(r"REMOVED:C:\Tools\foo.exe") == RunValue(r"C:\Tools\foo.exe", False)


def test_decode_repairs_double_marker():
    value = decode_run_value(r"REMOVED:REMOVED:C:\a.exe")
    assert value == RunValue(r"C:\a.exe", False)
    assert encode_run_value(value) == r"REMOVED:C:\a.exe"


def test_marker_only_counts_at_start():
    value = decode_run_value(r"C:\REMOVED:\a.exe")
    assert value.enabled
    assert value.path == r"C:\REMOVED:\a.exe"


def test_disable_then_enable_restores_original():
    original = r'"C:\Program Files\App\app.exe" --minimized'
    disabled = encode_run_value(RunValue(decode_run_value(original).path, False))
    assert disabled == DISABLED_MARKER + original
    restored = encode_run_value(RunValue(decode_run_value(disabled).path, True))
    assert restored == original


def test_location_key_round_trip():
    entry = StartupEntry("foo", r"C:\foo.exe", True, SourceKind.REGISTRY_CURRENT_USER)
    assert entry.location_key == "HKCU\\foo"
    assert build_location_key(entry.source_kind, entry.name) == entry.location_key
    assert build_location_key(SourceKind.REGISTRY_LOCAL_MACHINE, "bar") == "HKLM\\bar"


def test_startup_folder_entry_keeps_extension_in_key():
    lnk = StartupEntry("tool.lnk", r"C:\Startup\tool.lnk", True, SourceKind.STARTUP_FOLDER)
    exe = StartupEntry("tool.exe", r"C:\Startup\tool.exe", True, SourceKind.STARTUP_FOLDER)
    assert lnk.location_key == "StartupFolder\\tool.lnk"
    assert lnk.location_key != exe.location_key
    assert lnk.display_name == "tool"


def test_to_dict_for_ui():
    entry = StartupEntry("bar", r"C:\bar.exe", False, SourceKind.REGISTRY_LOCAL_MACHINE)
    assert entry.to_dict() == {
        "name": "bar",
        "path": r"C:\bar.exe",
        "location": "Todos los usuarios",
        "enabled": False,
        "key": "HKLM\\bar",
    }
