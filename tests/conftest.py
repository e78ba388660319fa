def pytest_configure(config):
    config.addinivalue_line("markers", "util: tests of the getters, setters and layouts")
