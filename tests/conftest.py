pytest_plugins = ["vpnblocker.testing.conftest"]
