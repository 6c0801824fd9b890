import main

ODOO_VARIABLES = ("ODOO_URL", "ODOO_DB", "ODOO_USERNAME", "ODOO_PASSWORD", "ODOO_API_KEY")


def test_missing_configuration_exits_with_failure(monkeypatch):
    for name in ODOO_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(main, "load_dotenv", lambda: False)

    assert main.main() == 1


def test_termination_signal_exits_immediately_with_zero(monkeypatch):
    codes = []
    monkeypatch.setattr(main.os, "_exit", codes.append)

    main._exit_cleanly(15, None)

    assert codes == [0]


def test_server_closes_client_on_shutdown(monkeypatch):
    monkeypatch.setattr(main, "load_dotenv", lambda: False)
    monkeypatch.setenv("ODOO_URL", "https://odoo.example.com")
    monkeypatch.setenv("ODOO_DB", "prod")
    monkeypatch.setenv("ODOO_USERNAME", "admin@example.com")
    monkeypatch.setenv("ODOO_PASSWORD", "s3cret")
    monkeypatch.setattr(main.signal, "signal", lambda *args: None)

    captured = {}

    class FakeServer:
        def run(self):
            pass

    def fake_create_server(dispatcher, on_shutdown=None):
        captured["on_shutdown"] = on_shutdown
        return FakeServer()

    monkeypatch.setattr(main, "create_server", fake_create_server)

    assert main.main() == 0
    assert captured["on_shutdown"].__name__ == "aclose"
    assert captured["on_shutdown"].__self__.url == "https://odoo.example.com"
