"""Tests for the three court list document transformers."""

import re

import pytest

from backend.src.common.types import CourtListType
from backend.src.services.courtlist.documents import (
    OnlinePublicCourtListDocument,
    PublicCourtListDocument,
    StandardCourtListDocument,
)
from backend.src.services.courtlist.payload import CourtListPayload
from backend.src.services.courtlist.transformers import (
    TransformerRegistry,
    transform,
    transform_online_public,
    transform_public,
    transform_standard,
)


class TestRegistry:
    def test_every_list_type_has_a_transformer(self):
        assert set(TransformerRegistry.registered_types()) == set(CourtListType)

    @pytest.mark.parametrize(
        "list_type,expected",
        [
            (CourtListType.STANDARD, StandardCourtListDocument),
            (CourtListType.PUBLIC, PublicCourtListDocument),
            (CourtListType.ONLINE_PUBLIC, OnlinePublicCourtListDocument),
        ],
    )
    def test_transform_selects_variant(self, sample_payload, list_type, expected):
        assert isinstance(transform(sample_payload, list_type), expected)


class TestStandardTransformer:
    def test_session_per_court_room(self, sample_payload):
        doc = transform_standard(sample_payload).to_dict()

        sessions = doc["document"]["data"]["job"]["sessions"]["session"]
        assert len(sessions) == 1
        session = sessions[0]
        assert session["room"] == 1
        assert session["sstart"] == "10:00"
        assert session["court"] == "Lavender Hill Magistrates' Court"
        assert [j["johKnownAs"] for j in session["judiciary"]] == ["Jane Smith", "John Brown", "Ann Lee"]
        assert [j["isPresiding"] for j in session["judiciary"]] == [True, False, False]
        assert [b["bstart"] for b in session["blocks"]["block"]] == ["10:00", "11:30"]

    def test_individual_case_detail(self, sample_payload):
        doc = transform_standard(sample_payload).to_dict()

        case = doc["document"]["data"]["job"]["sessions"]["session"][0]["blocks"]["block"][0]["cases"]["case"][0]
        assert case["caseno"] == "TFL1234567"
        assert case["def_name"] == "John Doe"
        assert case["def_dob"] == "1990-01-05"
        assert case["def_age"] == 36
        assert case["reportingRestriction"] is False
        assert case["def_addr"]["line1"] == "1 High Street"
        assert case["def_addr"]["pcode"] == "SW4 7AA"
        offence = case["offences"]["offence"][0]
        assert offence["code"] == "TH68001"
        assert offence["title"] == "Theft from a shop"
        assert offence["maxPenalty"] == "6 months imprisonment"

    def test_prosecuting_authority_party_appended(self, sample_payload):
        doc = transform_standard(sample_payload).to_dict()

        case = doc["document"]["data"]["job"]["sessions"]["session"][0]["blocks"]["block"][0]["cases"]["case"][0]
        roles = [p["partyRole"] for p in case["party"]]
        assert roles == ["DEFENDANT", "PROSECUTING_AUTHORITY"]
        assert case["party"][0]["individualDetails"]["individualSurname"] == "Doe"
        assert case["party"][1]["organisationDetails"]["organisationName"] == "TFL"

    def test_organisation_defendant(self, sample_payload):
        doc = transform_standard(sample_payload).to_dict()

        case = doc["document"]["data"]["job"]["sessions"]["session"][0]["blocks"]["block"][1]["cases"]["case"][0]
        assert case["def_name"] == "Acme Haulage Ltd"
        assert case["reportingRestriction"] is True
        assert case["party"][0]["individualDetails"] is None
        assert case["party"][0]["organisationDetails"]["organisationName"] == "Acme Haulage Ltd"

    def test_field_limits(self, sample_payload_dict):
        defendant = sample_payload_dict["hearingDates"][0]["courtRooms"][0]["timeslots"][0]["hearings"][0]["defendants"][0]
        defendant["address"]["address1"] = "A" * 60
        defendant["address"]["postcode"] = "SW11 1JU EXTRA"
        defendant["offences"][0]["offenceTitle"] = "T" * 300
        defendant["offences"][0]["offenceWording"] = "W" * 5000

        doc = transform_standard(CourtListPayload.model_validate(sample_payload_dict)).to_dict()

        case = doc["document"]["data"]["job"]["sessions"]["session"][0]["blocks"]["block"][0]["cases"]["case"][0]
        assert len(case["def_addr"]["line1"]) == 35
        assert len(case["def_addr"]["pcode"]) == 8
        assert len(case["offences"]["offence"][0]["title"]) == 120
        assert len(case["offences"]["offence"][0]["sum"]) == 4000

    def test_field_limits_apply_after_trimming(self, sample_payload_dict):
        defendant = sample_payload_dict["hearingDates"][0]["courtRooms"][0]["timeslots"][0]["hearings"][0]["defendants"][0]
        defendant["address"]["address1"] = "   " + "A" * 40
        defendant["address"]["address2"] = "   "
        defendant["offences"][0]["offenceTitle"] = "  " + "T" * 130

        doc = transform_standard(CourtListPayload.model_validate(sample_payload_dict)).to_dict()

        case = doc["document"]["data"]["job"]["sessions"]["session"][0]["blocks"]["block"][0]["cases"]["case"][0]
        assert case["def_addr"]["line1"] == "A" * 35
        assert case["def_addr"]["line2"] == ""
        assert case["offences"]["offence"][0]["title"] == "T" * 120

    def test_malformed_leaf_fields_degrade(self, sample_payload_dict):
        room = sample_payload_dict["hearingDates"][0]["courtRooms"][0]
        room["courtRoomName"] = "Main Hall"
        defendant = room["timeslots"][0]["hearings"][0]["defendants"][0]
        defendant["dateOfBirth"] = "31/12/1990"
        defendant["age"] = "unknown"
        room["timeslots"][0]["hearings"][0]["startTime"] = None

        doc = transform_standard(CourtListPayload.model_validate(sample_payload_dict)).to_dict()

        session = doc["document"]["data"]["job"]["sessions"]["session"][0]
        case = session["blocks"]["block"][0]["cases"]["case"][0]
        assert session["room"] == 1
        assert session["sstart"] == "00:00"
        assert case["def_dob"] is None
        assert case["def_age"] is None

    def test_venue_and_reference_ids(self, sample_payload):
        sample_payload.ou_code = "B01LY00"
        sample_payload.court_id_numeric = "325"

        doc = transform_standard(sample_payload).to_dict()

        assert doc["venue"]["venueAddress"]["line"] == ["176A Lavender Hill", "Battersea", "London"]
        assert doc["venue"]["venueAddress"]["postCode"] == "SW11 1JU"
        assert doc["ouCode"] == "B01LY00"
        assert doc["courtIdNumeric"] == "325"
        assert doc["document"]["info"]["start_time"] == "10:00:00"

    def test_deterministic(self, sample_payload):
        assert transform_standard(sample_payload).to_dict() == transform_standard(sample_payload).to_dict()

    def test_empty_payload(self):
        doc = transform_standard(CourtListPayload()).to_dict()

        assert doc["document"]["data"]["job"]["sessions"]["session"] == []
        assert doc["document"]["info"]["start_time"] == "00:00:00"


class TestPublicTransformer:
    def test_only_case_number_and_name(self, sample_payload):
        doc = transform_public(sample_payload).to_dict()

        blocks = doc["document"]["data"]["job"]["sessions"]["session"][0]["blocks"]["block"]
        cases = [c for b in blocks for c in b["cases"]["case"]]
        assert cases == [
            {"caseno": "TFL1234567", "def_name": "John Doe"},
            {"caseno": "ORG7654321", "def_name": "Acme Haulage Ltd"},
        ]

    def test_no_venue_or_personal_detail(self, sample_payload):
        doc = transform_public(sample_payload).to_dict()

        assert set(doc) == {"document"}
        assert "judiciary" not in doc["document"]["data"]["job"]["sessions"]["session"][0]

    def test_deterministic(self, sample_payload):
        assert transform_public(sample_payload).to_dict() == transform_public(sample_payload).to_dict()


class TestOnlinePublicTransformer:
    def test_tree_shape(self, sample_payload):
        doc = transform_online_public(sample_payload).to_dict()

        assert len(doc["courtLists"]) == 1
        court_house = doc["courtLists"][0]["courtHouse"]
        assert court_house["courtHouseName"] == "Lavender Hill Magistrates' Court"
        room = court_house["courtRoom"][0]
        assert room["courtRoomName"] == "Courtroom 01"
        sittings = room["session"][0]["sittings"]
        assert [s["sittingStart"] for s in sittings] == [
            "2026-01-05T10:00:00.000Z",
            "2026-01-05T11:30:00.000Z",
        ]

    def test_cases_carry_names_only(self, sample_payload):
        doc = transform_online_public(sample_payload).to_dict()

        sittings = doc["courtLists"][0]["courtHouse"]["courtRoom"][0]["session"][0]["sittings"]
        first_case = sittings[0]["hearing"][0]["case"][0]
        assert first_case["caseUrn"] == "TFL1234567"
        assert first_case["reportingRestriction"] is False
        assert first_case["party"] == [
            {
                "partyRole": "DEFENDANT",
                "individualDetails": {"individualForenames": "John", "individualSurname": "Doe"},
            }
        ]
        restricted_case = sittings[1]["hearing"][0]["case"][0]
        assert restricted_case["reportingRestriction"] is True

    def test_publication_date_is_iso_millis(self, sample_payload):
        doc = transform_online_public(sample_payload).to_dict()

        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", doc["document"]["publicationDate"])

    def test_deterministic_apart_from_publication_date(self, sample_payload):
        first = transform_online_public(sample_payload).to_dict()
        second = transform_online_public(sample_payload).to_dict()
        first.pop("document")
        second.pop("document")

        assert first == second

    def test_hearings_without_defendants_dropped(self, sample_payload_dict):
        for timeslot in sample_payload_dict["hearingDates"][0]["courtRooms"][0]["timeslots"]:
            for hearing in timeslot["hearings"]:
                hearing["defendants"] = []

        doc = transform_online_public(CourtListPayload.model_validate(sample_payload_dict)).to_dict()

        assert doc["courtLists"] == []
