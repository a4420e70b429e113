# tests/test_export_api.py
"""
EXPORT, PREVIEW AND HTTP SERVICE TESTS
======================================

The exported tables are what a user downloads and what the frontend
draws, so they must agree with the engine document object for object.
"""

import json

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest
from fastapi.testclient import TestClient

from api.main import app
from structsynth.engine import InMemoryEngine
from structsynth.export import members_csv, model_json, model_tables
from structsynth.generative import generate_special, generate_vessel
from structsynth.specs import SpecialStructureSpec, VesselSpec
from structsynth.viz import plot_model


@pytest.fixture
def tank():
    engine = InMemoryEngine()
    result = generate_vessel(engine, VesselSpec())
    return engine, result


class TestTables:

    def test_tables_match_document(self, tank):
        engine, result = tank
        tables = model_tables(engine)
        assert len(tables["nodes"]) == result.nodes
        assert len(tables["members"]) == result.members
        assert len(tables["panels"]) == result.panels
        assert len(tables["loads"]) == result.nodal_loads
        assert set(tables["sections"]["name"]) == set(engine.line_sections) | set(engine.panel_sections)
        print("✓ Tables agree with the engine document")

    def test_restraint_columns(self, tank):
        engine, result = tank
        nodes = model_tables(engine)["nodes"]
        assert int(nodes["ux"].sum()) == result.restraints

    def test_panel_sections_have_no_depth(self):
        engine = InMemoryEngine()
        generate_vessel(engine, VesselSpec.model_validate({"geometry": {"shellThickness": 0.012}}))
        sections = model_tables(engine)["sections"]
        wall = sections[sections["kind"] == "panel"].iloc[0]
        assert np.isnan(wall["depth"])
        assert wall["thickness"] > 0

    def test_members_csv_sorted_by_length(self, tank):
        engine, result = tank
        lines = members_csv(engine).strip().splitlines()
        assert lines[0] == "id,ni,nj,section,length"
        assert len(lines) == result.members + 1
        lengths = [float(line.split(",")[-1]) for line in lines[1:]]
        assert lengths == sorted(lengths)

    def test_model_json_loads_back(self, tank):
        engine, result = tank
        data = json.loads(model_json(engine, result))
        assert data["summary"]["nodes"] == result.nodes
        assert len(data["geometry"]["nodes"]) == result.nodes
        assert data["active_cases"] == engine.active_cases()
        assert data["units"] == engine.unit_system.value


class TestPreview:

    def test_plot_vessel(self, tank, tmp_path):
        engine, _ = tank
        out = plot_model(engine, str(tmp_path / "tank.png"), title="Tank")
        assert (tmp_path / "tank.png").exists()
        assert out == str(tmp_path / "tank.png")

    def test_plot_membrane_with_loads(self, tmp_path):
        engine = InMemoryEngine()
        generate_special(engine, SpecialStructureSpec.model_validate({"structureType": "Membrane"}))
        plot_model(engine, str(tmp_path / "membrane.png"), load_scale=0.5)
        assert (tmp_path / "membrane.png").stat().st_size > 0


class TestAPI:

    @pytest.fixture
    def client(self):
        return TestClient(app)

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert "vessel" in body["archetypes"]

    def test_generate_default_vessel(self, client):
        response = client.post("/api/generate/vessel", json={})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["summary"]["nodes"] == 192
        assert len(body["model"]["geometry"]["nodes"]) == 192
        print("✓ POST /api/generate/vessel -> 192 nodes")

    def test_validation_error(self, client):
        response = client.post("/api/generate/vessel", json={"geometry": {"diameter": -1}})
        assert response.status_code == 422

    def test_unknown_archetype(self, client):
        response = client.post("/api/generate/skyscraper", json={})
        assert response.status_code == 404

    def test_csv_export(self, client):
        response = client.post("/api/export/csv/bridge", json={"spans": [20, 20]})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.text.splitlines()[0] == "id,ni,nj,section,length"

    def test_json_export(self, client):
        response = client.post("/api/export/json/special", json={"structureType": "Dome"})
        assert response.status_code == 200
        assert response.json()["summary"]["nodes"] == 121
