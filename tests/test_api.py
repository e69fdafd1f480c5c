"""Tests for the Flask JSON API."""

import config


def run(client, **body):
    return client.post("/api/run", json=body)


class TestCatalogue:
    def test_index_lists_algorithms(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert b"Merge Sort" in resp.data

    def test_algorithm_card(self, client):
        data = client.get("/api/algorithms/quick_sort").get_json()
        assert data["label"] == "Quick Sort"
        assert len(data["pseudocode"]) == 17

    def test_traversal_card_by_method(self, client):
        data = client.get("/api/algorithms/graph_traversal?method=bfs").get_json()
        assert data["pseudocode"][0] == "def bfs(graph, start):"

    def test_unknown_algorithm(self, client):
        resp = client.get("/api/algorithms/bogo_sort")
        assert resp.status_code == 400
        assert "error" in resp.get_json()

    def test_list(self, client):
        assert len(client.get("/api/algorithms").get_json()) == 5


class TestInputs:
    def test_random_array(self, client):
        data = client.post("/api/array/random", json={"size": 10, "seed": 1}).get_json()
        assert len(data["array"]) == 10

    def test_random_array_size_limits(self, client):
        assert client.post("/api/array/random", json={"size": 2}).status_code == 400

    def test_parse(self, client):
        data = client.post("/api/array/parse", json={"text": "8, 3, 10"}).get_json()
        assert data["array"] == [8, 10]

    def test_parse_nothing_usable(self, client):
        assert client.post("/api/array/parse", json={"text": "x, y"}).status_code == 400

    def test_graph_generate(self, client):
        data = client.post("/api/graph/generate", json={"type": "grid"}).get_json()
        assert len(data["nodes"]) == 20

    def test_graph_generate_unknown_type(self, client):
        assert client.post("/api/graph/generate", json={"type": "hexagon"}).status_code == 400


class TestRunAndStep:
    def test_run_starts_at_zero(self, client):
        data = run(client, algo_key="selection_sort", array=[50, 30, 40, 10, 20]).get_json()
        assert data["index"] == 0
        assert data["total_steps"] == 33
        assert data["line"] == 3
        assert data["line_text"] == "    for i in range(n - 1):"
        assert data["step"] == ["ss-outer-loop", 0, 3]
        assert data["structure"] is None

    def test_navigation(self, client):
        run(client, algo_key="selection_sort", array=[50, 30, 40, 10, 20])
        assert client.post("/api/step/next").get_json()["index"] == 1

        end = client.post("/api/step/end").get_json()
        assert end["index"] == 33
        assert end["completed"]
        assert end["snapshot"]["array"] == [10, 20, 30, 40, 50]

        assert client.post("/api/step/prev").get_json()["index"] == 32
        assert client.post("/api/step/goto", json={"index": 999}).get_json()["index"] == 33
        assert client.post("/api/step/rewind").get_json()["index"] == 0
        assert client.get("/api/state").get_json()["index"] == 0

    def test_new_run_resets_index(self, client):
        run(client, algo_key="selection_sort", array=[50, 30, 40, 10, 20])
        client.post("/api/step/end")
        data = run(client, algo_key="merge_sort", array=[40, 20]).get_json()
        assert data["index"] == 0
        assert data["structure"]["id"] == "0"

    def test_state_without_run(self, client):
        assert client.get("/api/state").status_code == 400

    def test_goto_needs_integer(self, client):
        run(client, algo_key="selection_sort", array=[50, 30])
        assert client.post("/api/step/goto", json={"index": "3"}).status_code == 400

    def test_random_pivot_replays_the_same_log(self, client):
        first = run(client, algo_key="quick_sort", array=[80, 30, 50, 10, 90, 20, 70],
                    pivot_strategy="random").get_json()
        again = client.get("/api/state").get_json()
        assert again["total_steps"] == first["total_steps"]
        end = client.post("/api/step/end").get_json()
        assert end["snapshot"]["array"] == [10, 20, 30, 50, 70, 80, 90]

    def test_fibonacci_run(self, client):
        run(client, algo_key="fibonacci", n=3)
        end = client.post("/api/step/end").get_json()
        assert end["snapshot"]["result"] == 2

    def test_traversal_run(self, client):
        run(client, algo_key="graph_traversal", start_node="A", method="bfs")
        end = client.post("/api/step/end").get_json()
        assert end["snapshot"]["visited"] == list("ABCDEFG")
        assert end["snapshot"]["nodes_visited"] == 7

    def test_play_toggles(self, client):
        run(client, algo_key="selection_sort", array=[50, 30])
        assert client.post("/api/step/play").get_json()["is_playing"]
        assert not client.post("/api/step/play").get_json()["is_playing"]


class TestRejectedRuns:
    def test_unknown_algorithm(self, client):
        assert run(client, algo_key="bogo_sort").status_code == 400

    def test_unknown_pivot_strategy(self, client):
        resp = run(client, algo_key="quick_sort", array=[30, 10], pivot_strategy="middle")
        assert resp.status_code == 400
        assert "pivot strategy" in resp.get_json()["error"]

    def test_out_of_range_values(self, client):
        resp = run(client, algo_key="merge_sort", array=[3, 1000])
        assert resp.status_code == 400
        assert "between 5 and 100" in resp.get_json()["error"]

    def test_too_many_values_for_tree_view(self, client):
        assert run(client, algo_key="merge_sort", array=[10] * 9).status_code == 400

    def test_fibonacci_out_of_range(self, client):
        assert run(client, algo_key="fibonacci", n=20).status_code == 400

    def test_unknown_start_node(self, client):
        assert run(client, algo_key="graph_traversal", start_node="Z").status_code == 400

    def test_unknown_method(self, client):
        assert run(client, algo_key="graph_traversal", method="ids").status_code == 400


class TestConfigExportCompare:
    def test_speed_preset(self, client):
        assert client.post("/api/config/speed", json={"preset": "fast"}).get_json()["speed"] == 0.15

    def test_speed_slider(self, client):
        speed = client.post("/api/config/speed", json={"slider": 900, "max": 1000}).get_json()["speed"]
        assert abs(speed - 0.1) < 1e-9

    def test_speed_needs_a_value(self, client):
        assert client.post("/api/config/speed", json={}).status_code == 400

    def test_export(self, client):
        run(client, algo_key="quick_sort", array=[30, 10, 20], pivot_strategy="last")
        data = client.get("/api/export").get_json()
        assert data["summary"].startswith("Algorithm: Quick Sort")
        assert len(data["steps"]) == 19

    def test_compare_pivot_strategies(self, client):
        data = client.post("/api/compare", json={
            "array": [5, 10, 15, 20, 25, 30, 35, 40],
            "left": {"algo_key": "quick_sort", "pivot_strategy": "last"},
            "right": {"algo_key": "quick_sort", "pivot_strategy": "median"},
        }).get_json()
        assert data["winner_comparisons"] == "Quick Sort (median)"

    def test_compare_uses_current_input(self, client):
        run(client, algo_key="selection_sort", array=[50, 30, 40, 10, 20])
        data = client.post("/api/compare", json={
            "left": {"algo_key": "selection_sort"},
            "right": {"algo_key": "merge_sort"},
        }).get_json()
        assert data["left"]["input_size"] == data["right"]["input_size"] == 5

    def test_compare_without_input_shares_one_random_array(self, client):
        data = client.post("/api/compare", json={
            "seed": 7,
            "left": {"algo_key": "selection_sort"},
            "right": {"algo_key": "selection_sort"},
        }).get_json()
        assert data["winner_steps"] == data["winner_swaps"] == "tie"
        assert data["left"]["total_steps"] == data["right"]["total_steps"]

    def test_compare_after_a_fibonacci_run_still_shares_the_array(self, client):
        run(client, algo_key="fibonacci", n=3)
        data = client.post("/api/compare", json={
            "left": {"algo_key": "quick_sort", "pivot_strategy": "first"},
            "right": {"algo_key": "quick_sort", "pivot_strategy": "first"},
        }).get_json()
        assert data["winner_steps"] == data["winner_comparisons"] == "tie"
        assert data["left"]["input_size"] == config.DEFAULT_ARRAY_SIZE
