"""Tests for survey and survey response endpoints."""

from datetime import timedelta
from typing import Any

from fastapi import status
from fastapi.testclient import TestClient

from refahi.utils import utc_now
from tests.conftest import iso


def create_survey(
    client: TestClient,
    admin_headers: dict[str, str],
    activate: bool = True,
    **overrides: Any,
) -> dict[str, Any]:
    """Helper function to create a survey with a choice and a text question."""
    payload: dict[str, Any] = {"title": "Welfare satisfaction"}
    payload.update(overrides)
    response = client.post("/api/v1/surveys", json=payload, headers=admin_headers)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    survey_id = response.json()["survey"]["id"]

    response = client.post(
        f"/api/v1/surveys/{survey_id}/questions",
        json={"kind": "ChoiceSingle", "text": "How satisfied are you?", "options": ["Low", "High"]},
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED, response.text
    response = client.post(
        f"/api/v1/surveys/{survey_id}/questions",
        json={"kind": "Textual", "text": "Any suggestions?", "is_required": False},
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED, response.text

    if activate:
        response = client.post(f"/api/v1/surveys/{survey_id}/activate", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK, response.text
    return response.json()["survey"]


def start_attempt(
    client: TestClient, headers: dict[str, str], survey_id: int
) -> dict[str, Any]:
    response = client.post(f"/api/v1/surveys/{survey_id}/responses", headers=headers)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()["response"]


def answer_and_submit(
    client: TestClient, headers: dict[str, str], survey: dict[str, Any]
) -> dict[str, Any]:
    attempt = start_attempt(client, headers, survey["id"])
    choice = survey["questions"][0]
    response = client.put(
        f"/api/v1/survey-responses/{attempt['id']}/answers",
        json={"question_id": choice["id"], "selected_option_ids": [choice["options"][1]["id"]]},
        headers=headers,
    )
    assert response.status_code == status.HTTP_200_OK, response.text
    response = client.post(f"/api/v1/survey-responses/{attempt['id']}/submit", headers=headers)
    assert response.status_code == status.HTTP_200_OK, response.text
    return response.json()["response"]


class TestSurveyAdministration:
    def test_create_survey_with_questions(
        self, client: TestClient, admin_headers: dict[str, str], user_headers: dict[str, str]
    ) -> None:
        survey = create_survey(client, admin_headers, activate=False)

        assert survey["state"] == "Draft"
        assert survey["question_count"] == 2
        first, second = survey["questions"]
        assert first["order"] == 1
        assert [o["text"] for o in first["options"]] == ["Low", "High"]
        assert second["kind"] == "Textual"
        assert second["is_required"] is False

        detail = client.get(f"/api/v1/surveys/{survey['id']}", headers=user_headers).json()
        assert detail["questions"][0]["id"] == first["id"]

    def test_activate_requires_questions(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        survey_id = client.post(
            "/api/v1/surveys", json={"title": "Empty"}, headers=admin_headers
        ).json()["survey"]["id"]

        response = client.post(f"/api/v1/surveys/{survey_id}/activate", headers=admin_headers)

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_activate_outside_time_window(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        start = utc_now() + timedelta(days=1)
        survey = create_survey(
            client,
            admin_headers,
            activate=False,
            start_at=iso(start),
            end_at=iso(start + timedelta(days=7)),
        )

        response = client.post(f"/api/v1/surveys/{survey['id']}/activate", headers=admin_headers)

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_question_options_are_validated(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        survey_id = client.post(
            "/api/v1/surveys", json={"title": "Quiz"}, headers=admin_headers
        ).json()["survey"]["id"]

        response = client.post(
            f"/api/v1/surveys/{survey_id}/questions",
            json={"kind": "FixedMCQ4", "text": "Pick one", "options": ["A", "B", "C"]},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_questions_only_in_draft(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        survey = create_survey(client, admin_headers)

        response = client.post(
            f"/api/v1/surveys/{survey['id']}/questions",
            json={"kind": "Textual", "text": "Late question"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_close_survey(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        survey = create_survey(client, admin_headers)

        response = client.post(f"/api/v1/surveys/{survey['id']}/close", headers=admin_headers)

        assert response.json()["survey"]["state"] == "Closed"

    def test_create_requires_admin(
        self, client: TestClient, user_headers: dict[str, str]
    ) -> None:
        response = client.post("/api/v1/surveys", json={"title": "Nope"}, headers=user_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_surveys(
        self, client: TestClient, admin_headers: dict[str, str], user_headers: dict[str, str]
    ) -> None:
        create_survey(client, admin_headers)

        response = client.get("/api/v1/surveys", headers=user_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["total"] == 1


class TestSurveyResponses:
    """Test suite for answering surveys."""

    def test_answer_and_submit(
        self, client: TestClient, admin_headers: dict[str, str], user_headers: dict[str, str]
    ) -> None:
        survey = create_survey(client, admin_headers)

        submitted = answer_and_submit(client, user_headers, survey)

        assert submitted["status"] == "Submitted"
        assert submitted["attempt_number"] == 1
        assert submitted["submitted_at"] is not None
        assert submitted["answers"][0]["selected_option_ids"] == [
            survey["questions"][0]["options"][1]["id"]
        ]

        mine = client.get("/api/v1/survey-responses/me", headers=user_headers).json()
        assert mine["total"] == 1

    def test_start_returns_active_attempt(
        self, client: TestClient, admin_headers: dict[str, str], user_headers: dict[str, str]
    ) -> None:
        survey = create_survey(client, admin_headers)

        first = start_attempt(client, user_headers, survey["id"])
        second = start_attempt(client, user_headers, survey["id"])

        assert second["id"] == first["id"]

    def test_submit_requires_required_answers(
        self, client: TestClient, admin_headers: dict[str, str], user_headers: dict[str, str]
    ) -> None:
        survey = create_survey(client, admin_headers)
        attempt = start_attempt(client, user_headers, survey["id"])

        response = client.post(
            f"/api/v1/survey-responses/{attempt['id']}/submit", headers=user_headers
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "required question" in response.json()["detail"]

    def test_single_choice_accepts_one_option(
        self, client: TestClient, admin_headers: dict[str, str], user_headers: dict[str, str]
    ) -> None:
        survey = create_survey(client, admin_headers)
        attempt = start_attempt(client, user_headers, survey["id"])
        choice = survey["questions"][0]

        response = client.put(
            f"/api/v1/survey-responses/{attempt['id']}/answers",
            json={
                "question_id": choice["id"],
                "selected_option_ids": [o["id"] for o in choice["options"]],
            },
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_option_of_another_question_is_rejected(
        self, client: TestClient, admin_headers: dict[str, str], user_headers: dict[str, str]
    ) -> None:
        survey = create_survey(client, admin_headers)
        attempt = start_attempt(client, user_headers, survey["id"])

        response = client.put(
            f"/api/v1/survey-responses/{attempt['id']}/answers",
            json={"question_id": survey["questions"][0]["id"], "selected_option_ids": [9999]},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_blank_text_answer_is_rejected(
        self, client: TestClient, admin_headers: dict[str, str], user_headers: dict[str, str]
    ) -> None:
        survey = create_survey(client, admin_headers)
        attempt = start_attempt(client, user_headers, survey["id"])

        response = client.put(
            f"/api/v1/survey-responses/{attempt['id']}/answers",
            json={"question_id": survey["questions"][1]["id"], "text_answer": "   "},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_answer_replaces_previous_answer(
        self, client: TestClient, admin_headers: dict[str, str], user_headers: dict[str, str]
    ) -> None:
        survey = create_survey(client, admin_headers)
        attempt = start_attempt(client, user_headers, survey["id"])
        text_question = survey["questions"][1]["id"]

        for text in ("More tours", " Cheaper tours "):
            response = client.put(
                f"/api/v1/survey-responses/{attempt['id']}/answers",
                json={"question_id": text_question, "text_answer": text},
                headers=user_headers,
            )

        answers = response.json()["response"]["answers"]
        assert len(answers) == 1
        assert answers[0]["text_answer"] == "Cheaper tours"

    def test_single_submission(
        self, client: TestClient, admin_headers: dict[str, str], user_headers: dict[str, str]
    ) -> None:
        survey = create_survey(client, admin_headers, max_attempts_per_member=3)
        answer_and_submit(client, user_headers, survey)

        response = client.post(f"/api/v1/surveys/{survey['id']}/responses", headers=user_headers)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "already submitted" in response.json()["detail"]

    def test_attempt_limit(
        self, client: TestClient, admin_headers: dict[str, str], user_headers: dict[str, str]
    ) -> None:
        survey = create_survey(client, admin_headers)
        attempt = start_attempt(client, user_headers, survey["id"])
        cancelled = client.post(
            f"/api/v1/survey-responses/{attempt['id']}/cancel", headers=user_headers
        )
        assert cancelled.json()["response"]["status"] == "Cancelled"

        response = client.post(f"/api/v1/surveys/{survey['id']}/responses", headers=user_headers)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "No attempts left" in response.json()["detail"]

    def test_multiple_submissions_allowed(
        self, client: TestClient, admin_headers: dict[str, str], user_headers: dict[str, str]
    ) -> None:
        survey = create_survey(
            client, admin_headers, max_attempts_per_member=2, allow_multiple_submissions=True
        )
        answer_and_submit(client, user_headers, survey)

        second = answer_and_submit(client, user_headers, survey)

        assert second["attempt_number"] == 2

    def test_cool_down(
        self, client: TestClient, admin_headers: dict[str, str], user_headers: dict[str, str]
    ) -> None:
        survey = create_survey(
            client, admin_headers, max_attempts_per_member=2, cool_down_seconds=3600
        )
        attempt = start_attempt(client, user_headers, survey["id"])
        client.post(f"/api/v1/survey-responses/{attempt['id']}/cancel", headers=user_headers)

        response = client.post(f"/api/v1/surveys/{survey['id']}/responses", headers=user_headers)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "wait" in response.json()["detail"]

    def test_closed_survey_refuses_attempts(
        self, client: TestClient, admin_headers: dict[str, str], user_headers: dict[str, str]
    ) -> None:
        survey = create_survey(client, admin_headers)
        client.post(f"/api/v1/surveys/{survey['id']}/close", headers=admin_headers)

        response = client.post(f"/api/v1/surveys/{survey['id']}/responses", headers=user_headers)

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_response_of_someone_else(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_headers: dict[str, str],
        other_headers: dict[str, str],
    ) -> None:
        survey = create_survey(client, admin_headers)
        attempt = start_attempt(client, user_headers, survey["id"])

        response = client.post(
            f"/api/v1/survey-responses/{attempt['id']}/submit", headers=other_headers
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
