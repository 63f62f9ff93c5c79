"""
Mental health support chatbot.

The backend keeps no conversation state: callers serialize turns and send
the full prior history with every message.
"""

from src.domain.schema import Schema, array, enum, record, string
from src.domain.use_case import UseCase

NAME = "mental-health-chatbot"

ROLES = ("user", "bot")

REQUEST = Schema(
    string("message", "The user message to the chatbot."),
    array(
        "chatHistory",
        record(enum("role", ROLES), string("content")),
        "The chat history between the user and the chatbot.",
        required=False,
    ),
)

RESPONSE = Schema(
    string("response", "The chatbot response to the user message."),
)

PROMPT = """\
You are a psychologist chatbot designed to provide mental health support and guidance to women.

You can answer questions related to pre-period, postpartum, and mood swings. You can also provide support and console the user if they are feeling depressed or anxious.

Your goal is to analyze their mental health through chat and act as a psychiatrist to provide emotional support and answer their questions.

This is the conversation history. The user's last message is at the end.
{{#if chatHistory}}
{{#each chatHistory}}
  {{#if (eq role 'user')}}
    User: {{{content}}}
  {{else}}
    Bot: {{{content}}}
  {{/if}}
{{/each}}
{{/if}}
User: {{{message}}}
Bot:"""

USE_CASE = UseCase.define(
    NAME,
    request=REQUEST,
    response=RESPONSE,
    prompt=PROMPT,
    description="Supportive conversation about pre-period, postpartum and mood concerns.",
    failure_message="Failed to get response from chatbot.",
)
