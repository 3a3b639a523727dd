import pytest

from fakes import ScriptedLLM, intent_json
from shopassist.application.exceptions import CompletionError, InvalidInputError
from shopassist.application.models import Intent
from shopassist.application.services.intent_classifier import (
    FALLBACK_CONFIDENCE,
    IntentClassifier,
    parse_intent,
)


@pytest.mark.parametrize("intent", ["greeting", "shopping", "general_shopping"])
def test_valid_intents_are_returned(intent):
    classifier = IntentClassifier(ScriptedLLM(intent_json(intent, 0.92)))

    result = classifier.classify("hello")

    assert result.intent == Intent(intent)
    assert result.confidence == pytest.approx(0.92)
    assert result.clarification is None


def test_request_uses_history_and_json_mode():
    llm = ScriptedLLM(intent_json("shopping"))
    history = [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello!"}]

    IntentClassifier(llm).classify("wireless headphones under $100", history)

    call = llm.calls[0]
    assert call["user_message"] == "wireless headphones under $100"
    assert [t.content for t in call["history"]] == ["hi", "hello!"]
    assert call["force_json"] is True
    assert call["temperature"] == 0.2
    assert call["max_tokens"] == 100


def test_unclear_keeps_clarification_and_caps_confidence():
    llm = ScriptedLLM(intent_json("unclear", 0.8, "Which product do you mean?"))

    result = IntentClassifier(llm).classify("that one")

    assert result.intent == Intent.UNCLEAR
    assert result.confidence < 0.5
    assert result.clarification == "Which product do you mean?"


def test_clarification_dropped_for_other_intents():
    result = parse_intent('{"intent": "shopping", "confidence": 0.9, "clarification": "what?"}')
    assert result.clarification is None


@pytest.mark.parametrize("raw,expected", [('{"intent": "greeting"}', 0.5), ('{"intent": "greeting", "confidence": "high"}', 0.5), ('{"intent": "greeting", "confidence": 7}', 1.0), ('{"intent": "greeting", "confidence": -1}', 0.0)])
def test_confidence_is_coerced_into_range(raw, expected):
    assert parse_intent(raw).confidence == expected


@pytest.mark.parametrize(
    "response",
    [
        '{"intent": "buy_stuff", "confidence": 0.9}',
        "I think this is a greeting",
        '{"confidence": 0.9}',
        '{"intent": ["shopping"]}',
        CompletionError("Empty response from Groq API"),
        "",
    ],
)
def test_failures_fall_back_to_general_shopping(response):
    result = IntentClassifier(ScriptedLLM(response)).classify("hello?")

    assert result.intent == Intent.GENERAL_SHOPPING
    assert result.confidence == FALLBACK_CONFIDENCE


def test_failures_can_fall_back_to_unclear():
    classifier = IntentClassifier(ScriptedLLM(CompletionError("down")), fallback_to_unclear=True)

    result = classifier.classify("hello?")

    assert result.intent == Intent.UNCLEAR
    assert result.confidence < 0.5


def test_fenced_response_is_accepted():
    llm = ScriptedLLM('```json\n{"intent": "greeting", "confidence": 0.95}\n```')
    assert IntentClassifier(llm).classify("hi").intent == Intent.GREETING


@pytest.mark.parametrize("transcript", ["", "   ", None, 5])
def test_invalid_transcript_is_rejected(transcript):
    llm = ScriptedLLM()
    with pytest.raises(InvalidInputError):
        IntentClassifier(llm).classify(transcript)
    assert llm.calls == []


@pytest.mark.parametrize("error", [TimeoutError("read timed out"), ConnectionError("socket reset"), RuntimeError("sdk bug")])
def test_unexpected_client_errors_fall_back(error):
    result = IntentClassifier(ScriptedLLM(error)).classify("hello")

    assert result.intent == Intent.GENERAL_SHOPPING
    assert result.confidence == FALLBACK_CONFIDENCE
