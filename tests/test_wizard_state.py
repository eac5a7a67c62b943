"""Tests für den Ablauf des Assistenten ohne Browser."""

from __future__ import annotations

import json

import pytest

from app.registry.models import DataSourceType, S3DataSource
from app.schemas.editor import SCHEMA_NOT_OBJECT_MESSAGE
from app.ui.wizard_state import WizardState, WizardStep

FRAUD_TEXT = "I want to identify which company emails are fraudulent"


@pytest.fixture
def state_at_schema() -> WizardState:
    state = WizardState()
    state.set_problem_description(FRAUD_TEXT)
    state.continue_to_data_source()
    state.set_csv_file("mails.csv", 1024)
    state.continue_to_schema()
    return state


class TestProblemStep:
    def test_name_follows_description(self) -> None:
        state = WizardState()
        state.set_problem_description("predict customer churn next month")
        assert state.model_name == "Predict Customer Churn Next"

    def test_manual_name_is_kept(self) -> None:
        state = WizardState()
        state.set_problem_description("predict churn")
        state.set_model_name("My Model")
        state.set_problem_description("predict customer churn")
        assert state.model_name == "My Model"

    def test_blank_description_blocks_continue(self) -> None:
        state = WizardState()
        state.set_problem_description("   ")
        assert not state.continue_to_data_source()
        assert state.step == WizardStep.PROBLEM


class TestDataSourceStep:
    def test_csv_requires_file(self) -> None:
        state = WizardState(step=WizardStep.DATA_SOURCE, problem_description="x")
        assert not state.continue_to_schema()
        state.set_csv_file("data.csv", 10)
        assert state.continue_to_schema()
        assert state.step == WizardStep.SCHEMA

    def test_s3_requires_credentials(self) -> None:
        state = WizardState(step=WizardStep.DATA_SOURCE, problem_description="x")
        state.data_source_type = DataSourceType.S3
        state.s3_bucket_url = "s3://bucket"
        state.s3_access_key_id = "AKIA"
        assert not state.data_source_complete
        state.s3_secret_access_key = "secret"
        assert state.data_source_complete

    def test_s3_bucket_url_needs_scheme(self) -> None:
        state = WizardState(step=WizardStep.DATA_SOURCE, problem_description="x")
        state.data_source_type = DataSourceType.S3
        state.s3_bucket_url = "my-bucket/path"
        state.s3_access_key_id = "AKIA"
        state.s3_secret_access_key = "secret"

        assert not state.data_source_complete
        assert not state.continue_to_schema()
        assert state.step == WizardStep.DATA_SOURCE

        state.s3_bucket_url = "s3://my-bucket/path"
        assert state.continue_to_schema()

    def test_back(self) -> None:
        state = WizardState(step=WizardStep.SCHEMA)
        state.back()
        assert state.step == WizardStep.DATA_SOURCE
        state.back()
        assert state.step == WizardStep.PROBLEM
        state.back()
        assert state.step == WizardStep.PROBLEM


class TestSchemaStep:
    def test_editors_prefilled_from_matcher(self, state_at_schema: WizardState) -> None:
        output = json.loads(state_at_schema.output_schema_text)
        assert output["required"] == ["is_fraudulent", "confidence"]
        assert state_at_schema.output_schema_text.startswith('{\n  "type": "object"')
        assert state_at_schema.can_submit

    def test_invalid_json_blocks_submit(self, state_at_schema: WizardState) -> None:
        state_at_schema.set_input_schema("{not json")
        assert state_at_schema.input_schema_error
        assert not state_at_schema.can_submit

        state_at_schema.set_input_schema('{"type": "object"}')
        assert state_at_schema.input_schema_error is None
        assert state_at_schema.can_submit

    def test_array_rejected(self, state_at_schema: WizardState) -> None:
        state_at_schema.set_output_schema("[1, 2]")
        assert state_at_schema.output_schema_error == SCHEMA_NOT_OBJECT_MESSAGE

    def test_empty_editor_allowed(self, state_at_schema: WizardState) -> None:
        state_at_schema.set_output_schema(None)
        assert state_at_schema.output_schema_error is None
        assert state_at_schema.build_draft().output_schema == {}


class TestSubmit:
    def test_build_csv_draft(self, state_at_schema: WizardState) -> None:
        draft = state_at_schema.build_draft()
        assert draft.name == "I Want To Identify"
        assert draft.data_source.type == "csv"
        assert draft.output_schema["properties"]["confidence"]["maximum"] == 1

    def test_build_s3_draft(self) -> None:
        state = WizardState(problem_description="forecast sales")
        state.data_source_type = DataSourceType.S3
        state.s3_bucket_url = "s3://bucket/path"
        state.s3_region = ""
        state.s3_access_key_id = "AKIA"
        state.s3_secret_access_key = "secret"

        draft = state.build_draft()
        assert isinstance(draft.data_source, S3DataSource)
        assert draft.data_source.region == "us-east-1"
        assert draft.name == "Untitled Model"

    def test_second_submit_is_blocked(self, state_at_schema: WizardState) -> None:
        assert state_at_schema.begin_submit()
        assert not state_at_schema.begin_submit()
        assert not state_at_schema.can_submit

        state_at_schema.abort_submit()
        assert state_at_schema.begin_submit()

    def test_invalid_schema_blocks_begin_submit(self, state_at_schema: WizardState) -> None:
        state_at_schema.set_input_schema("{")
        assert not state_at_schema.begin_submit()
        assert not state_at_schema.submitting

    def test_lifecycle(self, state_at_schema: WizardState) -> None:
        state_at_schema.mark_submitted("abc")
        assert state_at_schema.step == WizardStep.TRAINING
        assert state_at_schema.step.number == 3

        state_at_schema.mark_finished(False, "boom")
        assert state_at_schema.step == WizardStep.FAILED
        assert state_at_schema.error_message == "boom"
