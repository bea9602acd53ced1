import json

from tools.intranet_admin import DEMO_INVITE_CODE, audit_access, list_companies, list_spaces, main, open_intranet, seed_demo


def test_seed_demo_is_idempotent(tmp_path):
    intranet = open_intranet(str(tmp_path))
    first = seed_demo(intranet)
    second = seed_demo(open_intranet(str(tmp_path)))

    assert first["seeded"] is True
    assert second["seeded"] is False
    assert len(intranet.repositories.companies.all()) == 2
    assert intranet.repositories.razorpay_config.get().key_id == "rzp_test_demo_123"


def test_seeded_admin_can_sign_in(tmp_path):
    intranet = open_intranet(str(tmp_path))
    seed_demo(intranet)
    principal = intranet.auth.login("admin@demo.com", "password")
    assert intranet.auth.verify_invite_code(DEMO_INVITE_CODE).id == principal.company_id


def test_list_companies_and_spaces(tmp_path):
    intranet = open_intranet(str(tmp_path))
    seed_demo(intranet)
    companies = {row["companyName"]: row for row in list_companies(intranet)}
    assert companies["Demo Corp"]["effectivePlan"] == "Basic"
    assert companies["Platform Admin"]["effectivePlan"] == "Pro"
    assert companies["Demo Corp"]["spaces"] == 1

    spaces = list_spaces(intranet, companies["Demo Corp"]["id"])
    assert spaces == [{"id": spaces[0]["id"], "spaceName": "General", "activeMembers": 1, "managers": 1}]


def test_audit_access(tmp_path):
    intranet = open_intranet(str(tmp_path))
    seed_demo(intranet)
    report = audit_access(intranet, "ADMIN@demo.com")
    assert report["role"] == "CompanyAdmin"
    assert [space["effectiveRole"] for space in report["spaces"]] == ["SpaceManager"]
    assert report["features"]["ai"] is False
    assert audit_access(intranet, "nobody@demo.com") is None


def test_main_reports_unknown_company(tmp_path, capsys):
    assert main(["--store-dir", str(tmp_path), "list-spaces", "--company-id", "missing"]) == 1
    assert "not found" in json.loads(capsys.readouterr().out)["error"]


def test_main_seeds_and_lists(tmp_path, capsys):
    assert main(["--store-dir", str(tmp_path), "seed-demo"]) == 0
    capsys.readouterr()
    assert main(["--store-dir", str(tmp_path), "list-companies"]) == 0
    output = json.loads(capsys.readouterr().out)
    assert {row["companyName"] for row in output["companies"]} == {"Demo Corp", "Platform Admin"}
