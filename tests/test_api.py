import importlib.util
import json
import os
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

_MISSING_DEPS = any(
    importlib.util.find_spec(name) is None
    for name in ("pydantic_settings", "fastapi", "httpx")
)

if not _MISSING_DEPS:
    from fastapi.testclient import TestClient

    from kisan.api.server import app
    from kisan.infra.config import get_config
    from kisan.infra.crop_dataset import clear_dataset_cache


@unittest.skipUnless(not _MISSING_DEPS, "fastapi/httpx/pydantic_settings missing")
class RiskApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self._env_backup = {
            "RISK_RANDOM_SEED": os.environ.get("RISK_RANDOM_SEED"),
            "CROP_DATASET_PATH": os.environ.get("CROP_DATASET_PATH"),
        }
        os.environ["RISK_RANDOM_SEED"] = "11"
        os.environ.pop("CROP_DATASET_PATH", None)
        get_config.cache_clear()
        clear_dataset_cache()
        self.client = TestClient(app)

    def tearDown(self) -> None:
        for key, value in self._env_backup.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_config.cache_clear()
        clear_dataset_cache()

    def test_health(self) -> None:
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["status"], "ok")
        self.assertTrue(body["datasetLoaded"])
        self.assertTrue(body["randomSeeded"])

    def test_predict_flood(self) -> None:
        resp = self.client.post(
            "/api/predict",
            json={"temperature": 28, "rainfall": 400, "soilMoisture": 90, "crop": "rice"},
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["prediction"], "flood_risk")
        self.assertEqual(body["confidence"], "95.0")
        self.assertEqual(len(body["recommendations"]), 4)
        self.assertEqual(
            body["input"],
            {"temperature": 28.0, "rainfall": 400.0, "soilMoisture": 90.0, "crop": "rice"},
        )

    def test_predict_clamps_echo(self) -> None:
        resp = self.client.post(
            "/api/predict", json={"temperature": 200, "rainfall": 10, "soilMoisture": 20}
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["input"]["temperature"], 55.0)
        self.assertEqual(body["prediction"], "heat_stress")
        self.assertIsNone(body["input"]["crop"])

    def test_seeded_predictions_repeat(self) -> None:
        payload = {"temperature": 45, "rainfall": 10, "soilMoisture": 20}
        first = self.client.post("/api/predict", json=payload).json()
        second = self.client.post("/api/predict", json=payload).json()
        self.assertEqual(first["confidence"], second["confidence"])

    def test_huge_integer_reading_is_clamped(self) -> None:
        body = '{"temperature": 1' + "0" * 400 + ', "rainfall": 10, "soilMoisture": 20}'
        resp = self.client.post(
            "/api/predict",
            content=body.encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["input"]["temperature"], 55.0)
        self.assertEqual(resp.json()["prediction"], "heat_stress")

    def test_screen_endpoint(self) -> None:
        resp = self.client.post(
            "/api/screen", json={"temperature": 30, "rainfall": 320, "soilMoisture": 85}
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["prediction"], "flood_risk")
        self.assertEqual(body["input"]["soilMoisture"], 85.0)
        self.assertNotIn("confidence", body)

        resp = self.client.post("/api/screen", json={"temperature": 30})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["missingFields"], ["rainfall", "soilMoisture"])

    def test_malformed_crop_entry_is_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "agri_data.json"
            path.write_text(
                json.dumps({"crops": [{"name": 7}, {"name": "Wheat", "category": "Cereal"}]}),
                encoding="utf-8",
            )
            os.environ["CROP_DATASET_PATH"] = str(path)
            get_config.cache_clear()
            clear_dataset_cache()
            resp = self.client.get("/api/crops")
            self.assertEqual(resp.status_code, 200)
            self.assertEqual([item["name"] for item in resp.json()["crops"]], ["Wheat"])
            resp = self.client.get("/api/dataset", params={"category": "cereal"})
            self.assertEqual(resp.status_code, 200)
            self.assertEqual(len(resp.json()["data"]), 1)

    def test_missing_field_returns_400(self) -> None:
        resp = self.client.post(
            "/api/predict", json={"temperature": 30, "soilMoisture": 40}
        )
        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertEqual(body["missingFields"], ["rainfall"])
        self.assertIn("rainfall", body["error"])

    def test_non_numeric_field_returns_400(self) -> None:
        resp = self.client.post(
            "/api/predict",
            json={"temperature": "hot", "rainfall": 10, "soilMoisture": 40},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["invalidFields"], ["temperature"])

    def test_malformed_json_returns_400(self) -> None:
        resp = self.client.post(
            "/api/predict",
            content=b"{temperature",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(resp.status_code, 400)

    def test_request_id_is_echoed(self) -> None:
        resp = self.client.get("/api/health", headers={"X-Request-ID": "trace-123"})
        self.assertEqual(resp.headers["X-Request-ID"], "trace-123")
        generated = self.client.get("/api/health")
        self.assertTrue(generated.headers["X-Request-ID"])

    def test_crops_listing(self) -> None:
        resp = self.client.get("/api/crops")
        self.assertEqual(resp.status_code, 200)
        names = [item["name"] for item in resp.json()["crops"]]
        self.assertIn("Wheat", names)

    def test_dataset_queries(self) -> None:
        resp = self.client.get("/api/dataset", params={"crop": "wheat"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["data"]["name_urdu"], "گندم")

        resp = self.client.get("/api/dataset", params={"category": "cereal"})
        self.assertTrue(all(item["category"] == "Cereal" for item in resp.json()["data"]))

        resp = self.client.get("/api/dataset")
        self.assertIn("crops", resp.json()["data"])

        resp = self.client.get("/api/dataset", params={"crop": "barley"})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"error": "Crop not found"})


if __name__ == "__main__":
    unittest.main()
