"""Unit tests for the prompt session (lambda_starter.wizard.prompts)."""

from __future__ import annotations

import pytest

from lambda_starter.options import LambdaDeployment, YesOrNo
from lambda_starter.wizard.prompts import INPUT_PROMPT, InvalidChoiceError, _parse_choice

DEPLOY_PROMPT = "How do you want to deploy? (enter for Java runtime)"


def _choose_deployment(session, default=LambdaDeployment.FAT_JAR):
    return session.choose(
        DEPLOY_PROMPT,
        list(LambdaDeployment),
        label=lambda d: d.description,
        default=default,
    )


class TestChoose:
    @pytest.mark.unit
    def test_blank_selects_default(self, scripted_session):
        session, reader = scripted_session([""])
        assert _choose_deployment(session) is LambdaDeployment.FAT_JAR
        assert reader.prompts == [INPUT_PROMPT]

    @pytest.mark.unit
    def test_number_selects_option(self, scripted_session):
        session, _reader = scripted_session(["2"])
        assert _choose_deployment(session) is LambdaDeployment.NATIVE_EXECUTABLE

    @pytest.mark.unit
    def test_whitespace_is_ignored(self, scripted_session):
        session, _reader = scripted_session(["  2  "])
        assert _choose_deployment(session) is LambdaDeployment.NATIVE_EXECUTABLE

    @pytest.mark.unit
    def test_prints_prompt_and_numbered_options(self, scripted_session):
        session, _reader = scripted_session([""])
        _choose_deployment(session)
        lines = session.console.file.getvalue().splitlines()
        assert lines[:3] == [
            DEPLOY_PROMPT,
            "*1) Java runtime",
            " 2) GraalVM Native Executable",
        ]

    @pytest.mark.unit
    def test_default_marker_follows_default(self, scripted_session):
        session, _reader = scripted_session([""])
        assert _choose_deployment(session, LambdaDeployment.NATIVE_EXECUTABLE) is LambdaDeployment.NATIVE_EXECUTABLE
        output = session.console.file.getvalue()
        assert " 1) Java runtime" in output
        assert "*2) GraalVM Native Executable" in output

    @pytest.mark.parametrize("bad", ["0", "3", "-1", "abc", "1.5"])
    @pytest.mark.unit
    def test_invalid_input_reprompts(self, scripted_session, bad):
        session, reader = scripted_session([bad, "2"])
        assert _choose_deployment(session) is LambdaDeployment.NATIVE_EXECUTABLE
        assert len(reader.prompts) == 2
        assert f"Invalid selection '{bad}', enter a number between 1 and 2" in session.console.file.getvalue()

    @pytest.mark.unit
    def test_end_of_input_propagates(self, scripted_session):
        session, _reader = scripted_session(["nope"])
        with pytest.raises(EOFError):
            _choose_deployment(session)

    @pytest.mark.unit
    def test_empty_options_rejected(self, scripted_session):
        session, _reader = scripted_session([])
        with pytest.raises(ValueError):
            session.choose("Pick", [])

    @pytest.mark.unit
    def test_default_must_be_an_option(self, scripted_session):
        session, _reader = scripted_session([])
        with pytest.raises(ValueError):
            session.choose("Pick", ["a", "b"], default="c")

    @pytest.mark.unit
    def test_labels_are_not_markup(self, scripted_session):
        session, _reader = scripted_session([""])
        session.choose("Pick", ["[bold]x[/bold]"])
        assert "*1) [bold]x[/bold]" in session.console.file.getvalue()


class TestYesOrNo:
    @pytest.mark.unit
    def test_default_yes(self, scripted_session):
        session, _reader = scripted_session([""])
        assert session.yes_or_no("CDK? (enter for yes)") is True
        assert "*1) Yes" in session.console.file.getvalue()

    @pytest.mark.unit
    def test_answer_no(self, scripted_session):
        session, _reader = scripted_session(["2"])
        assert session.yes_or_no("CDK? (enter for yes)") is False

    @pytest.mark.unit
    def test_default_no(self, scripted_session):
        session, _reader = scripted_session([""])
        assert session.yes_or_no("CDK?", default=YesOrNo.NO) is False


class TestParseChoice:
    @pytest.mark.unit
    def test_blank_is_default(self):
        assert _parse_choice("   ", 3) is None

    @pytest.mark.unit
    def test_in_range(self):
        assert _parse_choice("3", 3) == 2

    @pytest.mark.unit
    def test_out_of_range(self):
        with pytest.raises(InvalidChoiceError):
            _parse_choice("4", 3)

    @pytest.mark.unit
    def test_invalid_choice_is_value_error(self):
        assert issubclass(InvalidChoiceError, ValueError)
