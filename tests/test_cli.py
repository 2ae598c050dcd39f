"""
Tests for the netanalyzer command line interface
"""

import json

import pytest

from cli.netanalyzer import main, detect_format

NETWORK = {
    "users": [
        {"id": "1", "name": "Alice", "age": 30, "location": "New York", "interests": ["hiking"]},
        {"id": "2", "name": "Bob", "age": 25, "location": "Boston", "interests": ["chess"]},
        {"id": "3", "name": "Carol", "age": 41, "location": "York", "interests": []},
    ],
    "connections": [
        {"user1": "1", "user2": "2"},
        {"user1": "2", "user2": "3"},
    ],
}


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "Network.json"
    path.write_text(json.dumps(NETWORK), encoding="utf-8")
    return str(path)


def run_json(capsys, *argv):
    assert main(["--json", *argv]) == 0
    return json.loads(capsys.readouterr().out)


class TestCLI:
    """Test cases for CLI subcommands"""

    def test_detect_format(self):
        assert detect_format("users.CSV", None) == "csv"
        assert detect_format("Network.json", None) == "json"
        assert detect_format("Network.json", "csv") == "csv"

    def test_users(self, capsys, data_file):
        assert main(["--data", data_file, "users"]) == 0

        out = capsys.readouterr().out
        assert "Name: Alice" in out
        assert "Interests: chess" in out

    def test_bfs_and_dfs(self, capsys, data_file):
        assert run_json(capsys, "--data", data_file, "bfs", "1")["order"] == ["1", "2", "3"]
        assert run_json(capsys, "--data", data_file, "dfs", "3")["order"] == ["3", "2", "1"]

    def test_recommend(self, capsys, data_file):
        result = run_json(capsys, "--data", data_file, "recommend", "1")
        assert result == {"1": ["3"]}

        result = run_json(capsys, "--data", data_file, "recommend")
        assert result == {"1": ["3"], "2": [], "3": ["1"]}

    def test_recommend_text_uses_names(self, capsys, data_file):
        assert main(["--data", data_file, "recommend", "1"]) == 0

        assert capsys.readouterr().out.splitlines() == ["Recommendations for Alice:", "- Carol"]

    def test_communities(self, capsys, data_file):
        result = run_json(capsys, "--data", data_file, "communities", "--threshold", "0")

        assert sorted(result["communities"]) == [["1"], ["2"], ["3"]]

    def test_paths(self, capsys, data_file):
        result = run_json(capsys, "--data", data_file, "paths")

        assert result["users"] == ["1", "2", "3"]
        assert result["distances"][0] == [0, 1, 2]

    @pytest.mark.parametrize("algorithm", ["kmp", "rabin_karp"])
    def test_search(self, capsys, data_file, algorithm):
        result = run_json(capsys, "--data", data_file, "search", "location", "York", "--algorithm", algorithm)
        assert [u["id"] for u in result] == ["1", "3"]

        result = run_json(capsys, "--data", data_file, "search", "name", "BOB", "--ignore-case")
        assert [u["id"] for u in result] == ["2"]

    def test_search_without_matches(self, capsys, data_file):
        assert main(["--data", data_file, "search", "name", "Zed"]) == 0

        assert "No matching users found." in capsys.readouterr().out

    def test_unknown_user_is_an_error(self, capsys, data_file):
        assert main(["--data", data_file, "bfs", "ghost"]) == 1

        assert "error:" in capsys.readouterr().err

    def test_add_user_and_connect_with_save(self, capsys, data_file):
        assert main(["--data", data_file, "--save", "add-user", "4", "--name", "Dave",
                     "--interest", "jazz", "--interest", "jazz"]) == 0
        assert main(["--data", data_file, "--save", "connect", "3", "4"]) == 0
        capsys.readouterr()

        with open(data_file, encoding="utf-8") as f:
            saved = json.load(f)
        assert saved["users"][-1]["interests"] == ["jazz"]
        assert {"user1": "3", "user2": "4"} in saved["connections"]

    def test_mutation_without_save_leaves_file(self, capsys, data_file):
        with open(data_file, encoding="utf-8") as f:
            before = f.read()

        assert main(["--data", data_file, "disconnect", "1", "2"]) == 0

        with open(data_file, encoding="utf-8") as f:
            assert f.read() == before

    def test_add_duplicate_user(self, data_file):
        with pytest.raises(SystemExit):
            main(["--data", data_file, "add-user", "1"])

    def test_connect_unknown_user(self, data_file):
        with pytest.raises(SystemExit):
            main(["--data", data_file, "connect", "1", "ghost"])

    def test_connect_user_to_themselves(self, data_file):
        with pytest.raises(SystemExit) as excinfo:
            main(["--data", data_file, "connect", "1", "1"])

        assert "themselves" in str(excinfo.value.code)

    def test_missing_data_file_starts_empty(self, capsys, tmp_path):
        result = run_json(capsys, "--data", str(tmp_path / "none.json"), "users")

        assert result == []

    def test_malformed_data_file(self, capsys, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{oops", encoding="utf-8")

        assert main(["--data", str(bad), "users"]) == 1
        assert "error:" in capsys.readouterr().err
