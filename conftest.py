'''
Use this module to run amsfsurvey in py.test modes

See COPYRIGHT.md for copyright information.

Unit tests are under tests/unit_tests, taxonomy fixtures under tests/resources.
'''


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: tests loading several taxonomy copies")
    config.addinivalue_line("markers", "fast: tests not marked slow")


def pytest_collection_modifyitems(items):
    for item in items:
        if item.get_closest_marker("slow") is None:
            item.add_marker("fast")
