import pytest

from startright import registry


class FakeKey:
    def __init__(self, reg, root, path):
        self.reg = reg
        self.root = root
        self.path = path
        self.closed = False
        reg.open_handles += 1

    @property
    def values(self):
        return self.reg.keys[(self.root, self.path)]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        self.reg.open_handles -= 1
        return False


class FakeWinreg:
    """Registro en memoria con la misma API que el módulo winreg"""

    HKEY_CURRENT_USER = 0x80000001
    HKEY_LOCAL_MACHINE = 0x80000002
    KEY_READ = 0x20019
    KEY_SET_VALUE = 0x0002
    REG_SZ = 1
    REG_EXPAND_SZ = 2
    REG_BINARY = 3
    REG_DWORD = 4

    def __init__(self):
        self.keys = {}
        self.write_denied = set()
        self.read_denied = set()
        self.open_handles = 0

    # Helpers para los tests
    def run_values(self, root):
        return self.keys.setdefault((root, registry.RUN_KEY), {})

    def put(self, root, name, data, regtype=None):
        self.run_values(root)[name] = (data, self.REG_SZ if regtype is None else regtype)

    def data(self, root, name):
        return self.run_values(root)[name][0]

    # API de winreg
    def OpenKey(self, root, path, reserved=0, access=KEY_READ):
        if root in self.read_denied:
            raise PermissionError(5, "Access is denied")
        if access & self.KEY_SET_VALUE and root in self.write_denied:
            raise PermissionError(5, "Access is denied")
        if (root, path) not in self.keys:
            raise FileNotFoundError(2, "The system cannot find the file specified")
        return FakeKey(self, root, path)

    def EnumValue(self, key, index):
        items = list(key.values.items())
        if index >= len(items):
            raise OSError(259, "No more data is available")
        name, (data, regtype) = items[index]
        return name, data, regtype

    def QueryValueEx(self, key, name):
        if name not in key.values:
            raise FileNotFoundError(2, "The system cannot find the file specified")
        return key.values[name]

    def SetValueEx(self, key, name, reserved, regtype, value):
        key.values[name] = (value, regtype)

    def DeleteValue(self, key, name):
        if name not in key.values:
            raise FileNotFoundError(2, "The system cannot find the file specified")
        del key.values[name]


@pytest.fixture
def fake_winreg(monkeypatch):
    reg = FakeWinreg()
    reg.run_values(reg.HKEY_CURRENT_USER)
    reg.run_values(reg.HKEY_LOCAL_MACHINE)
    monkeypatch.setattr(registry, "winreg", reg)
    return reg


@pytest.fixture
def startup_dir(tmp_path):
    folder = tmp_path / "Startup"
    folder.mkdir()
    return folder
