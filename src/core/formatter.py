"""Historical context and prompt formatting - Pure functions.

This module turns nearby events into the text handed to the generation
service, and builds the assessment prompt itself.
All functions are pure with no side effects.
"""

import re

from src.core.geo import ScoredEvent


NO_NEARBY_EVENTS_TEXT = (
    "No significant historical earthquakes found nearby in the provided dataset."
)

# The generated assessment is asked to open with this sentence.
DISCLAIMER = (
    "Please note that this analysis is a general assessment based on available "
    "information and models. Natural disaster risks are inherently complex and "
    "can change over time. This analysis should not be used for critical "
    "decision-making without consulting local experts and official resources."
)

_DISCLAIMER_PARAGRAPH = re.compile(r"^\*\*Disclaimer:\*\*.*?\n\n")


def format_number(value: float) -> str:
    """Format a number without a trailing '.0' for whole values.

    Pure function.
    """
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_event_line(scored: ScoredEvent) -> str:
    """Format a one-line description of a nearby event.

    Pure function.

    Args:
        scored: Event with its distance from the query point

    Returns:
        Line like "- Magnitude 5 on 2023-12-19 at depth 10.5 km (3.2 km away)"
    """
    date_str = scored.event.time.strftime("%Y-%m-%d")
    # Zero depth is reported as unknown
    depth_str = format_number(scored.depth) if scored.depth else "N/A"
    return (
        f"- Magnitude {format_number(scored.magnitude)} on {date_str} "
        f"at depth {depth_str} km ({scored.distance_km:.1f} km away)"
    )


def format_historical_context(
    nearby: list[ScoredEvent],
    max_distance_km: float,
) -> str:
    """Summarize nearby events for the prompt.

    Pure function.

    Args:
        nearby: Nearby events, nearest first
        max_distance_km: Search radius used to find them

    Returns:
        Multi-line context; the first line is the one-line summary
    """
    if not nearby:
        return NO_NEARBY_EVENTS_TEXT

    header = (
        f"Found {len(nearby)} historical earthquakes within "
        f"{format_number(max_distance_km)} km. Recent/nearby events include:"
    )
    lines = [format_event_line(s) for s in nearby]
    return "\n".join([header, *lines])


def summarize_context(context: str) -> str:
    """Return the first line of a historical context."""
    return context.split("\n", 1)[0]


def build_assessment_prompt(
    latitude: float,
    longitude: float,
    historical_context: str,
    max_distance_km: float,
    max_results: int,
) -> str:
    """Build the risk assessment prompt for the generation service.

    Pure function. The prompt frames the request as contextual risk
    analysis, never as a prediction.

    Args:
        latitude: Query latitude
        longitude: Query longitude
        historical_context: Output of format_historical_context()
        max_distance_km: Search radius, quoted in the prompt
        max_results: Event cap, quoted in the prompt

    Returns:
        Prompt text
    """
    radius = format_number(max_distance_km)

    return f"""**Analysis Request:**
Assess the general natural disaster activity level and potential risk for the location:
Latitude: {format_number(latitude)}
Longitude: {format_number(longitude)}

**Historical Context from provided dataset (within {radius}km, limited to {max_results} events, sorted by distance):**
{historical_context}

**Task:**
Based on the provided historical context AND your general knowledge of regional geography, geology, climate, and historical disaster patterns for this specific latitude and longitude:

For **Earthquakes**:
1. Describe the general tectonic setting of this area.
2. Assess the *general* level of seismic activity typically expected for this location (e.g., low, moderate, high, very high).
3. If earthquakes *were* to occur, what is a typical magnitude range based on historical patterns and known fault characteristics?
4. Mention any major known fault lines nearby, if applicable.
5. Briefly summarize the potential seismic risk level for this specific location, keeping in mind the inherent unpredictability.

For **Wildfires**:
6. Describe the typical vegetation, climate patterns, and any known history of significant wildfires in this region.
7. Assess the *general* level of wildfire risk for this location (e.g., low, moderate, high). Consider dry seasons, vegetation density, and human activity.
8. If wildfires *were* to occur, what are typical contributing factors and potential scale based on historical events and regional characteristics?
9. Mention any nearby geographical features or human developments that might increase or decrease wildfire risk.
10. Briefly summarize the potential wildfire risk level for this specific location.

For **Tsunamis**:
11. Describe the proximity of this location to major bodies of water and known tsunamigenic sources (e.g., subduction zones, major offshore faults, historical landslide areas).
12. Assess the *general* level of tsunami risk for this location (e.g., very low, low, moderate, high).
13. If a tsunami *were* to impact this area, what might be a typical inundation level or historical precedent?
14. Mention any geographical features (e.g., shallow continental shelf, bays) that might amplify or mitigate tsunami impact.
15. Briefly summarize the potential tsunami risk level for this specific location.

For **Other Natural Disasters** (e.g., floods, cyclones/hurricanes, landslides, volcanic activity, extreme weather events):
16. Identify other significant types of natural disasters that have historically affected or are geographically relevant to this region.
17. For each identified disaster type, briefly assess the *general* level of risk (e.g., low, moderate, high).
18. Mention any specific geographical or meteorological factors that contribute to these risks.
19. Briefly summarize the potential risk level for these other natural disasters for this specific location.

**Output Format:** Provide a concise summary addressing points 1-19. Start the response with the disclaimer: "{DISCLAIMER}" Provide each disaster type's analysis in a separate, clearly labeled section.
"""


def strip_disclaimer(text: str) -> str:
    """Remove a leading '**Disclaimer:**' paragraph from generated text.

    Pure function. Text without such a paragraph is returned unchanged.
    """
    return _DISCLAIMER_PARAGRAPH.sub("", text, count=1)
