"""Tests for the Repository: seeds, persistence and record validation."""

import logging
import sqlite3
from dataclasses import replace
from datetime import date

import pytest

from gymfix.database.models import BomLine, Client, ClientMachine, Part, User
from gymfix.database.repository import Repository, _next_id
from gymfix.errors import NotFound, ValidationFailed


class TestLoading:
    def test_fresh_store_loads_factory_data(self, repo):
        assert len(repo.parts) == 7
        assert len(repo.jobs) == 2
        assert len(repo.clients) == 2
        assert repo.user_count() == 3

    def test_changes_survive_reload(self, db, repo):
        repo.get_part("p1").quantity = 7
        assert repo.save("parts") is True
        assert Repository(db).get_part("p1").quantity == 7

    def test_unsaved_collections_still_seeded(self, db, repo):
        repo.parts.clear()
        repo.save("parts")
        reloaded = Repository(db)
        assert reloaded.parts == []
        assert len(reloaded.jobs) == 2

    def test_corrupt_payload_falls_back(self, db, caplog):
        db.execute(
            "INSERT INTO collections (key, payload) VALUES (?, ?)",
            ("parts", "{not json"),
        )
        with caplog.at_level(logging.ERROR):
            repo = Repository(db)
        assert len(repo.parts) == 7
        assert "Failed to load parts" in caplog.text

    def test_save_failure_is_logged_not_raised(self, repo, monkeypatch,
                                               caplog):
        def broken(snapshots):
            raise sqlite3.OperationalError("disk I/O error")
        monkeypatch.setattr(repo.db, "write_collections", broken)

        repo.get_part("p1").quantity = 1
        with caplog.at_level(logging.ERROR):
            assert repo.save("parts") is False
        assert "Failed to persist parts" in caplog.text
        # In-memory state stays authoritative
        assert repo.get_part("p1").quantity == 1

    def test_reset_to_defaults(self, db, repo):
        repo.get_part("p1").quantity = 0
        repo.save()
        repo.reset_to_defaults()
        assert repo.get_part("p1").quantity == 50
        assert db.read_collection("parts") is None


class TestIds:
    def test_next_id_uses_highest_suffix(self):
        records = [Part(id="p2"), Part(id="p10"), Part(id="legacy")]
        assert _next_id("p", records) == "p11"

    def test_next_id_empty(self):
        assert _next_id("j", []) == "j1"


class TestParts:
    def test_get_part_by_sku_case_insensitive(self, repo):
        assert repo.get_part_by_sku(" brg-6004 ").id == "p6"
        assert repo.get_part_by_sku("nope") is None

    def test_require_part(self, repo):
        with pytest.raises(NotFound):
            repo.require_part("p99")

    def test_low_stock_sorted_by_shortfall(self, repo):
        low = [p.id for p in repo.get_low_stock_parts()]
        # p7: 2-5, p5: 0-2, p3: 1-2
        assert low == ["p7", "p5", "p3"]

    def test_parts_by_type(self, repo):
        assert [p.id for p in repo.get_parts_by_type("ASSEMBLY")] == ["p7"]

    def test_name_and_sku_required(self, repo):
        with pytest.raises(ValidationFailed):
            repo.create_part(Part(name="", sku="X"))

    def test_unknown_category(self, repo):
        with pytest.raises(ValidationFailed):
            repo.create_part(Part(name="X", sku="X", category="TOYS"))

    def test_negative_values(self, repo):
        with pytest.raises(ValidationFailed):
            repo.create_part(Part(name="X", sku="X", quantity=-1))
        with pytest.raises(ValidationFailed):
            repo.create_part(Part(name="X", sku="X", price=-1))

    def test_single_part_cannot_carry_bom(self, repo):
        with pytest.raises(ValidationFailed):
            repo.create_part(Part(name="X", sku="X", bom=[BomLine("p1", 1)]))

    def test_assembly_needs_components(self, repo):
        with pytest.raises(ValidationFailed):
            repo.create_part(Part(name="X", sku="X", type="ASSEMBLY"))

    def test_assembly_duplicate_component(self, repo):
        with pytest.raises(ValidationFailed):
            repo.create_part(Part(
                name="X", sku="X", type="ASSEMBLY",
                bom=[BomLine("p1", 1), BomLine("p1", 2)],
            ))

    def test_assembly_zero_quantity_line(self, repo):
        with pytest.raises(ValidationFailed):
            repo.create_part(Part(name="X", sku="X", type="ASSEMBLY",
                                  bom=[BomLine("p1", 0)]))

    def test_assembly_unknown_component(self, repo):
        with pytest.raises(NotFound):
            repo.create_part(Part(name="X", sku="X", type="ASSEMBLY",
                                  bom=[BomLine("p99", 1)]))
        assert len(repo.parts) == 7

    def test_assembly_cannot_contain_itself(self, repo):
        kit = repo.get_part("p7")
        with pytest.raises(ValidationFailed):
            repo.update_part(replace(kit, bom=kit.bom + [BomLine("p7", 1)]))
        assert repo.get_part("p7") is kit
        assert len(kit.bom) == 2

    def test_update_refuses_stored_object(self, repo):
        kit = repo.get_part("p7")
        kit.bom.append(BomLine("p7", 1))
        with pytest.raises(ValidationFailed, match="copy"):
            repo.update_part(kit)

    def test_failed_update_keeps_stored_part(self, repo):
        with pytest.raises(ValidationFailed):
            repo.update_part(replace(repo.get_part("p1"), quantity=-5))
        assert repo.get_part("p1").quantity == 50

    @pytest.mark.parametrize("fields", [
        {"quantity": 1.5},
        {"min_level": "2"},
        {"quantity": True},
        {"price": "25"},
    ])
    def test_numeric_fields_type_checked(self, repo, fields):
        with pytest.raises(ValidationFailed):
            repo.create_part(Part(name="X", sku="X-1", **fields))
        assert len(repo.parts) == 7

    def test_bom_quantity_must_be_whole(self, repo):
        with pytest.raises(ValidationFailed):
            repo.create_part(Part(name="X", sku="X", type="ASSEMBLY",
                                  bom=[BomLine("p1", 1.5)]))

    def test_component_cannot_become_assembly(self, repo):
        bearing = Part(id="p6", name="Łożysko", sku="BRG-6004",
                       type="ASSEMBLY", bom=[BomLine("p1", 1)])
        with pytest.raises(ValidationFailed):
            repo.update_part(bearing)
        assert repo.get_part("p6").type == "SINGLE"

    def test_assembly_turned_single_drops_bom(self, repo):
        kit = Part(id="p7", name="Kit", sku="KIT-ROL-01", type="SINGLE",
                   bom=[BomLine("p6", 2)])
        repo.update_part(kit)
        assert repo.get_part("p7").bom == []
        assert "bom" not in repo.get_part("p7").to_dict()


class TestClients:
    def test_create_client_starts_without_machines(self, repo):
        client = Client(name="Zdrofit", machines=[ClientMachine(id="x")])
        repo.create_client(client)
        assert client.id == "c3"
        assert client.machines == []

    def test_client_name_required(self, repo):
        with pytest.raises(ValidationFailed):
            repo.create_client(Client(name=" "))

    def test_machine_install_date_defaults_to_today(self, repo):
        machine = ClientMachine(model="T7x", serial_number="SN-1")
        repo.add_machine("c1", machine)
        assert machine.install_date == date.today().isoformat()
        assert machine.id == "m5"

    def test_search_clients(self, repo):
        assert [c.id for c in repo.search_clients("city")] == ["c1"]
        assert len(repo.search_clients("")) == 2


class TestUsers:
    def test_lookup_by_email_ignores_case(self, repo):
        assert repo.get_user_by_email("ADMIN@gymfix.pl").id == "u1"

    def test_create_requires_password(self, repo):
        with pytest.raises(ValidationFailed):
            repo.create_user(User(name="New", email="new@gymfix.pl"))

    def test_duplicate_email(self, repo):
        with pytest.raises(ValidationFailed):
            repo.create_user(User(name="Dup", email="Serwis@gymfix.pl",
                                  password="x"))

    def test_unknown_permission(self, repo):
        with pytest.raises(ValidationFailed):
            repo.create_user(User(name="N", email="n@gymfix.pl",
                                  password="x", permissions={"FLY"}))

    def test_update_keeps_password_when_blank(self, repo):
        user = User(id="u3", name="Piotr", email="serwis@gymfix.pl",
                    role="TECHNICIAN", password="")
        repo.update_user(user)
        assert repo.get_user("u3").password == "password"

    def test_delete_user(self, repo):
        repo.delete_user("u2")
        assert repo.get_user("u2") is None
        with pytest.raises(NotFound):
            repo.delete_user("u2")

    def test_search_users_by_position(self, repo):
        assert [u.id for u in repo.search_users("logistyki")] == ["u2"]


class TestDashboard:
    def test_summary(self, repo):
        summary = repo.get_dashboard_summary()
        assert summary["total_parts"] == 7
        assert summary["low_stock"] == 3
        assert summary["open_jobs"] == 2
        assert summary["clients"] == 2
        # 50*25 + 3*450 + 1*1200 + 12*45 + 0 + 20*15 + 2*55
        assert summary["stock_value"] == pytest.approx(4750.0)
