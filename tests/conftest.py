pytest_plugins = ["stashclient.testing.conftest"]
