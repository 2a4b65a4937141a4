def pytest_configure(config):
    config.addinivalue_line("markers", "performance: slow throughput gate tests")
