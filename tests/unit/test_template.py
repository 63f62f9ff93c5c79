"""
Unit tests for the prompt template compiler and renderer.

Tests verify:
- Verbatim substitution
- Conditional and repetition sections
- Media embedding as ordered prompt parts
- Definition-time rejection of malformed or unknown markers
"""

import pytest

from src.domain.exceptions import DefinitionError
from src.domain.ports import MediaAttachment
from src.domain.schema import Schema, array, boolean, enum, media, number, record, string
from src.domain.template import PromptTemplate, render

PNG_BYTES = b"\x89PNG\r\n\x1a\n"


def compile_(source: str, *fields) -> PromptTemplate:
    return PromptTemplate.compile(source, Schema(*fields))


class TestSubstitution:
    """{{field}} and {{{field}}} markers."""

    def test_double_and_triple_braces_are_equivalent(self) -> None:
        template = compile_("{{mood}}|{{{mood}}}", string("mood"))
        assert template.render({"mood": "calm"}).text == "calm|calm"

    def test_values_are_not_html_escaped(self) -> None:
        """Substituted text is inserted verbatim."""
        template = compile_("Note: {{notes}}", string("notes"))
        rendered = template.render({"notes": "<b>Tom & Jerry's</b>"})
        assert rendered.text == "Note: <b>Tom & Jerry's</b>"

    def test_absent_optional_field_renders_empty(self) -> None:
        template = compile_("Age: {{{age}}}.", number("age", required=False))
        assert template.render({}).text == "Age: ."

    def test_integral_float_renders_without_fraction(self) -> None:
        template = compile_("Week {{w}}", number("w"))
        assert template.render({"w": 12.0}).text == "Week 12"

    def test_boolean_renders_lowercase(self) -> None:
        template = compile_("{{flag}}", boolean("flag"))
        assert template.render({"flag": True}).text == "true"

    def test_array_renders_comma_joined(self) -> None:
        template = compile_("{{tags}}", array("tags", string("")))
        assert template.render({"tags": ["a", "b"]}).text == "a,b"

    def test_module_level_render(self) -> None:
        template = compile_("Hi {{name}}", string("name"))
        assert render(template, {"name": "Asha"}).text == "Hi Asha"


class TestConditionals:
    """{{#if}} / {{else if}} / {{else}} sections."""

    @pytest.mark.parametrize(
        "spec,value,expected",
        [
            (string("x"), "", "no"),
            (string("x"), "x", "yes"),
            (array("x", string("")), [], "no"),
            (array("x", string("")), ["a"], "yes"),
            (number("x"), 0, "no"),
            (number("x"), 3, "yes"),
            (boolean("x"), False, "no"),
        ],
    )
    def test_truthiness(self, spec, value, expected) -> None:
        """Empty string, empty list, zero and false are falsy."""
        template = PromptTemplate.compile("{{#if x}}yes{{else}}no{{/if}}", Schema(spec))
        assert template.render({"x": value}).text == expected

    def test_absent_field_is_falsy(self) -> None:
        template = compile_("{{#if x}}yes{{/if}}", string("x", required=False))
        assert template.render({}).text == ""

    def test_else_if_chain_takes_first_match(self) -> None:
        template = compile_(
            "{{#if trimester}}pregnant{{else if postDelivery}}postpartum{{else}}cycle{{/if}}",
            number("trimester", required=False),
            boolean("postDelivery", required=False),
        )
        assert template.render({"trimester": 2, "postDelivery": True}).text == "pregnant"
        assert template.render({"postDelivery": True}).text == "postpartum"
        assert template.render({}).text == "cycle"

    def test_eq_helper(self) -> None:
        template = compile_(
            "{{#if (eq role 'user')}}User{{else}}Bot{{/if}}",
            enum("role", ("user", "bot")),
        )
        assert template.render({"role": "user"}).text == "User"
        assert template.render({"role": "bot"}).text == "Bot"


class TestRepetition:
    """{{#each}} sections."""

    def test_each_over_strings(self) -> None:
        template = compile_("{{#each items}}[{{this}}]{{/each}}", array("items", string("")))
        assert template.render({"items": ["a", "b"]}).text == "[a][b]"

    def test_each_over_empty_list(self) -> None:
        template = compile_("start{{#each items}}[{{this}}]{{/each}}end", array("items", string("")))
        assert template.render({"items": []}).text == "startend"

    def test_each_exposes_element_fields_and_index(self) -> None:
        template = compile_(
            "{{#each cycles}}{{@index}}: {{start}}-{{this.end}}; {{/each}}",
            array("cycles", record(string("start"), string("end"))),
        )
        rendered = template.render(
            {"cycles": [{"start": "01", "end": "05"}, {"start": "29", "end": "02"}]}
        )
        assert rendered.text == "0: 01-05; 1: 29-02; "

    def test_standalone_block_lines_are_consumed(self) -> None:
        """Block tags on their own line leave no blank lines behind."""
        source = "Symptoms:\n{{#each symptoms}}\n- {{{this}}}\n{{/each}}\nDone."
        template = compile_(source, array("symptoms", string("")))
        rendered = template.render({"symptoms": ["Lump", "Pain"]})
        assert rendered.text == "Symptoms:\n- Lump\n- Pain\nDone."

    def test_nested_if_inside_each(self) -> None:
        template = compile_(
            "{{#each history}}\n{{#if (eq role 'user')}}\nU: {{content}}\n{{else}}\nB: {{content}}\n{{/if}}\n{{/each}}\n",
            array("history", record(enum("role", ("user", "bot")), string("content"))),
        )
        rendered = template.render(
            {"history": [{"role": "user", "content": "hi"}, {"role": "bot", "content": "hello"}]}
        )
        assert rendered.text == "U: hi\nB: hello\n"


class TestMedia:
    """{{media url=field}} markers."""

    def test_media_becomes_attachment_part(self, png_data_uri: str) -> None:
        template = compile_("Image: {{media url=photo}} end", media("photo"))
        rendered = template.render({"photo": png_data_uri})

        assert rendered.parts == (
            "Image: ",
            MediaAttachment(mime_type="image/png", data=PNG_BYTES),
            " end",
        )
        assert "base64" not in rendered.text
        assert rendered.attachments == (MediaAttachment("image/png", PNG_BYTES),)

    def test_absent_optional_media_renders_nothing(self) -> None:
        template = compile_(
            "{{#if photo}}\nPhoto: {{media url=photo}}\n{{/if}}\nText",
            media("photo", required=False),
        )
        rendered = template.render({})
        assert rendered.parts == ("Text",)
        assert rendered.attachments == ()


class TestDefinitionErrors:
    """Templates are checked against the request schema when compiled."""

    @pytest.mark.parametrize(
        "source",
        [
            "{{missing}}",
            "{{#if missing}}x{{/if}}",
            "{{#each missing}}x{{/each}}",
            "{{#each items}}{{missing}}{{/each}}",
            "{{mood.length}}",
        ],
    )
    def test_undeclared_field(self, source: str) -> None:
        with pytest.raises(DefinitionError):
            compile_(source, string("mood"), array("items", string("")))

    @pytest.mark.parametrize(
        "source",
        [
            "{{#if mood}}unclosed",
            "{{#each items}}unclosed",
            "stray {{/if}}",
            "{{#if mood}}x{{/each}}",
            "{{#unless mood}}x{{/unless}}",
            "{{#if (gt mood 'a')}}x{{/if}}",
            "{{mood other}}",
            "{{#if}}x{{/if}}",
            "{{#if mood}}x{{else unless items}}y{{/if}}",
        ],
    )
    def test_malformed_template(self, source: str) -> None:
        with pytest.raises(DefinitionError):
            compile_(source, string("mood"), array("items", string("")))

    def test_each_requires_array(self) -> None:
        with pytest.raises(DefinitionError, match="array"):
            compile_("{{#each mood}}x{{/each}}", string("mood"))

    def test_media_requires_media_field(self) -> None:
        with pytest.raises(DefinitionError, match="media"):
            compile_("{{media url=mood}}", string("mood"))

    def test_media_field_cannot_be_substituted(self) -> None:
        """Raw image data must never be spliced into prompt text."""
        with pytest.raises(DefinitionError, match="media"):
            compile_("{{photo}}", media("photo"))

    def test_index_outside_each(self) -> None:
        with pytest.raises(DefinitionError, match="@index"):
            compile_("{{@index}}", string("mood"))
