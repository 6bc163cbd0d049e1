"""
Prompt Templates
Defines prompts for every concierge generator
"""

from langchain_core.prompts import PromptTemplate

# ============================================
# Attraction Insight Prompt
# ============================================

INSIGHT_PROMPT = PromptTemplate(
    input_variables=["attraction_name", "location", "travel_style"],
    template="""Act as a luxury hotel concierge.
Write a short, engaging 2-sentence cultural fact or tip about {attraction_name} in {location}.
Tailor the tone for a {travel_style} traveler."""
)

# ============================================
# Souvenir Prompts
# ============================================

SOUVENIR_CAPTION_PROMPT = PromptTemplate(
    input_variables=["location", "travel_style"],
    template="""Generate a short, inspiring travel quote (max 10 words) for a postcard from {location}.
The vibe should be {travel_style}.
Do not include quotes or attribution, just the text."""
)

POSTCARD_IMAGE_PROMPT = PromptTemplate(
    input_variables=["hotel_name", "location", "travel_style"],
    template="""A beautiful, artistic travel poster illustration of {hotel_name} in {location}.
Style: {travel_style} vibe, high-end digital art, warm lighting, scenic view.
The image should look like a premium collectible postcard.
No text overlay."""
)

# ============================================
# Image Asset Prompts
# ============================================

AVATAR_PROMPT = PromptTemplate(
    input_variables=["travel_style"],
    template="""Generate a 3D icon of a cute traveler avatar.
Style: Pixar/Disney 3D animation style.
Lighting: Bright studio lighting, soft shadows.
Background: Plain white or very soft light gray background (clean).
Character: {travel_style} traveler, friendly expression, vibrant colors.
Composition: Centered headshot icon.
Do not include complex backgrounds or dark moody lighting."""
)

ATTRACTION_IMAGE_PROMPT = PromptTemplate(
    input_variables=["attraction_type", "attraction_name"],
    template="""Generate a cute 3D icon representing a {attraction_type} (related to {attraction_name}).
Style: High-quality 3D render, toy-like, clay material, soft studio lighting, bright colors, isolated on plain white background.
The object should look like a collectible miniature.
If the type is generic, create a 3D map pin or location marker.
Minimalist, single object."""
)

# ============================================
# Dynamic Attraction List Prompt
# ============================================

# Literal braces are doubled for the template engine
DYNAMIC_ATTRACTIONS_PROMPT = PromptTemplate(
    input_variables=["location", "travel_style"],
    template="""Identify exactly 3 "Nearby" hidden gems/activities and exactly 3 "Must-See" famous landmarks in {location}.
Target Audience: {travel_style} traveler.
For 'icon', suggest a valid Material Symbol name (snake_case) that represents the place (e.g. 'restaurant', 'park', 'museum', 'photo_camera').

Return ONLY a valid JSON object of this shape:
{{"attractions": [{{"name": "...", "type": "Short type e.g. Cafe, Park, Temple", "category": "Nearby or Must-See", "description": "Short engaging description, max 10 words", "icon": "material_symbol_name"}}]}}"""
)

# ============================================
# Itinerary Prompt
# ============================================

ITINERARY_PROMPT = PromptTemplate(
    input_variables=["location", "travel_style", "check_in", "check_out"],
    template="""Create a brief, daily itinerary for a trip to {location}.
Traveler Style: {travel_style}.
Dates: {check_in} to {check_out}.
Format: Markdown, bullet points.
Focus: Provide a "Theme of the Day" and 2 key activities per day.
Keep it concise and exciting."""
)

# ============================================
# Chat System Instruction
# ============================================

CHAT_SYSTEM_PROMPT = PromptTemplate(
    input_variables=["hotel_name"],
    template="""You are a helpful, sophisticated hotel concierge at {hotel_name}. Keep answers brief (under 50 words) and helpful."""
)
