"""
Content generator tests: prompts, fallbacks, parsing
"""

from datetime import date

import httpx
import pytest

from concierge.conftest import BASE_URL, text_response
from concierge.llm import generators as g
from concierge.llm.generators import ContentGenerators, attraction_placeholder
from concierge.llm.transport import GenerationTransport
from concierge.schemas.ai_schemas import AttractionCategory, ChatTurn, Speaker, TravelStyle


# ============================================
# No credential
# ============================================

async def test_no_credential_returns_fallbacks_without_calls(fake_gemini, offline_transport):
    generators = ContentGenerators(offline_transport)

    assert await generators.generate_insight("The Bund", "Shanghai, China", TravelStyle.SOLO) == g.INSIGHT_NO_KEY
    assert await generators.generate_souvenir_caption("Tokyo, Japan", TravelStyle.LUXURY) == "To travel is to live."
    assert await generators.generate_itinerary(
        "Tokyo, Japan", TravelStyle.FAMILY, date(2026, 10, 20), date(2026, 10, 24)
    ) == "Itinerary generation offline."
    assert await generators.chat("Hi", [], "Conrad Tokyo") == "System offline."
    assert await generators.generate_avatar(TravelStyle.BUSINESS) is None
    assert await generators.generate_postcard_image("Conrad Tokyo", "Tokyo, Japan", TravelStyle.SOLO) is None
    assert await generators.generate_attraction_image("Park", "Ueno Park") is None
    assert await generators.generate_dynamic_attractions("Tokyo, Japan", TravelStyle.SOLO) == []

    assert fake_gemini.count() == 0


# ============================================
# Failures
# ============================================

@pytest.mark.parametrize("kind, call, expected", [
    ("insight", lambda gen: gen.generate_insight("Big Ben", "London, UK", TravelStyle.SOLO), g.INSIGHT_FAILED),
    ("caption", lambda gen: gen.generate_souvenir_caption("London, UK", TravelStyle.SOLO), "A moment in time."),
    ("chat", lambda gen: gen.chat("Hello", [], "Hilton"), "I am having trouble connecting to the concierge network."),
    ("image", lambda gen: gen.generate_avatar(TravelStyle.SOLO), None),
    ("attractions", lambda gen: gen.generate_dynamic_attractions("Tokyo, Japan", TravelStyle.SOLO), []),
])
async def test_service_errors_become_failure_fallbacks(fake_gemini, generators, kind, call, expected):
    fake_gemini.failing.add(kind)
    assert await call(generators) == expected
    assert fake_gemini.count(kind) == 1


async def test_empty_output_fallbacks(fake_gemini, generators):
    for kind in ("insight", "caption", "itinerary", "chat"):
        fake_gemini.replies[kind] = {"candidates": []}

    assert await generators.generate_insight("Big Ben", "London, UK", TravelStyle.SOLO) == g.INSIGHT_EMPTY
    assert await generators.generate_souvenir_caption("London, UK", TravelStyle.SOLO) == "Memories made here."
    assert await generators.generate_itinerary(
        "London, UK", TravelStyle.SOLO, date(2026, 10, 24), date(2026, 10, 29)
    ) == "Could not generate itinerary."
    assert await generators.chat("Hello", [], "Hilton") == "I'm sorry, I couldn't understand that."


async def test_network_failure_falls_back():
    def refuse(request):
        raise httpx.ConnectError("down", request=request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(refuse))
    generators = ContentGenerators(GenerationTransport(api_key="k", base_url=BASE_URL, client=client))

    assert await generators.generate_itinerary(
        "Tokyo, Japan", TravelStyle.SOLO, date(2026, 10, 20), date(2026, 10, 24)
    ) == g.ITINERARY_FAILED


# ============================================
# Prompts and output shaping
# ============================================

async def test_insight_prompt_mentions_attraction_location_and_style(fake_gemini, generators):
    text = await generators.generate_insight("Yu Garden", "Shanghai, China", TravelStyle.FAMILY)

    assert text == "A fine insight."
    prompt = fake_gemini.prompts("insight")[0]
    assert "Yu Garden" in prompt and "Shanghai, China" in prompt and "Family" in prompt


async def test_caption_is_stripped_of_quotes(generators):
    assert await generators.generate_souvenir_caption("Ithaafushi, Maldives", TravelStyle.LUXURY) == "Sun, sand and stillness."


async def test_itinerary_prompt_carries_dates(fake_gemini, generators):
    await generators.generate_itinerary("London, UK", TravelStyle.BUSINESS, date(2026, 10, 24), date(2026, 10, 29))

    prompt = fake_gemini.prompts("itinerary")[0]
    assert "2026-10-24 to 2026-10-29" in prompt


async def test_chat_sends_history_and_system_instruction(fake_gemini, generators):
    history = [
        ChatTurn(speaker=Speaker.GUEST, text="Where is breakfast?"),
        ChatTurn(speaker=Speaker.CONCIERGE, text="On level 2."),
    ]
    reply = await generators.chat("What time?", history, "Conrad Tokyo")

    assert reply == "Happy to help."
    payload = fake_gemini.calls[0][1]
    assert len(payload["contents"]) == 3
    assert "Conrad Tokyo" in payload["systemInstruction"]["parts"][0]["text"]
    assert payload["generationConfig"]["maxOutputTokens"] == g.CHAT_MAX_TOKENS


async def test_image_generators_return_data_uri(fake_gemini, generators):
    avatar = await generators.generate_avatar(TravelStyle.LUXURY)

    assert avatar.startswith("data:image/png;base64,")
    assert "Luxury traveler" in fake_gemini.prompts("image")[0]


async def test_image_response_without_image_is_none(fake_gemini, generators):
    fake_gemini.replies["image"] = text_response("I can only describe it.")
    assert await generators.generate_attraction_image("Temple", "Senso-ji") is None


# ============================================
# Dynamic attractions
# ============================================

async def test_dynamic_attractions_parsed_from_fenced_json(fake_gemini, generators):
    fake_gemini.replies["attractions"] = text_response(
        "```json\n"
        '{"attractions": ['
        '{"name": "Omoide Yokocho", "type": "Alley", "category": "Nearby", "description": "Tiny bars.", "icon": "ramen_dining"},'
        '{"name": "", "type": "Ghost", "category": "Nearby"},'
        '{"name": "Tokyo Tower", "type": "Landmark", "category": "must-see"},'
        '{"name": "Senso-ji", "type": "Temple", "category": "Must-See", "icon": ""}'
        "]}\n```"
    )

    attractions = await generators.generate_dynamic_attractions("Tokyo, Japan", TravelStyle.SOLO)

    assert [a.name for a in attractions] == ["Omoide Yokocho", "Tokyo Tower", "Senso-ji"]
    assert [a.id for a in attractions] == [9000, 9001, 9002]
    assert attractions[0].icon == "ramen_dining"
    assert attractions[1].category == AttractionCategory.MUST_SEE
    assert attractions[2].icon == "place"
    assert all(a.image_url == "" for a in attractions)


async def test_dynamic_attractions_accept_bare_list(fake_gemini, generators):
    fake_gemini.replies["attractions"] = text_response('[{"name": "Ueno Park", "type": "Park"}]')

    attractions = await generators.generate_dynamic_attractions("Tokyo, Japan", TravelStyle.FAMILY)

    assert len(attractions) == 1
    assert attractions[0].category == AttractionCategory.NEARBY


async def test_malformed_attraction_json_is_empty_list(fake_gemini, generators):
    fake_gemini.replies["attractions"] = text_response('{"attractions": [{"name": "Tokyo Tower"')
    assert await generators.generate_dynamic_attractions("Tokyo, Japan", TravelStyle.SOLO) == []


# ============================================
# Placeholder
# ============================================

def test_placeholder_is_deterministic_svg():
    first = attraction_placeholder("Park", "Hyde Park")
    assert first == attraction_placeholder("Park", "Hyde Park")
    assert first.startswith("data:image/svg+xml;base64,")
