# interfaces/booking_directory.py
"""
Booking Directory
Mock reservation system: booking lookup, trip status and the curated
attraction lists per booking. Booking dates are relative to "today" so the
demo orders always land in the same lifecycle stage.
"""

from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Union
from loguru import logger

from ..schemas.ai_schemas import Attraction, AttractionCategory, Booking, TripStatus


NEARBY = AttractionCategory.NEARBY
MUST_SEE = AttractionCategory.MUST_SEE

# ============================================
# Mock Data
# ============================================

# order_id -> booking fields, with check-in/out as day offsets from today
MOCK_BOOKINGS: Dict[str, Dict] = {
    "1001": {
        "guest_name": "Smith",
        "first_name": "John",
        "hotel_name": "Hilton London Metropole",
        "location": "London, UK",
        "check_in": 5,   # upcoming
        "check_out": 10,
        "background_image": "https://images.unsplash.com/photo-1513635269975-59663e0ac1ad?q=80&w=2070&auto=format&fit=crop",
    },
    "1002": {
        "guest_name": "Anderson",
        "first_name": "Anderson",
        "hotel_name": "Waldorf Astoria Shanghai Qiantan",
        "location": "Shanghai, China",
        "check_in": -2,  # during stay
        "check_out": 2,
        "background_image": "https://images.unsplash.com/photo-1548919973-5cef591cdbc9?q=80&w=2070&auto=format&fit=crop",
    },
    "1003": {
        "guest_name": "Doe",
        "first_name": "Jane",
        "hotel_name": "Waldorf Astoria Maldives",
        "location": "Ithaafushi, Maldives",
        "check_in": -10,  # completed
        "check_out": -5,
        "background_image": "https://images.unsplash.com/photo-1573843981267-be1999ff37cd?q=80&w=1974&auto=format&fit=crop",
    },
    "1004": {
        "guest_name": "Lee",
        "first_name": "David",
        "hotel_name": "Conrad Chongqing",
        "location": "Chongqing, China",
        "check_in": 15,
        "check_out": 20,
        "background_image": "https://images.unsplash.com/photo-1534234828569-1d227f4d2b28?q=80&w=2070&auto=format&fit=crop",
    },
    "1005": {
        "guest_name": "Tanaka",
        "first_name": "Kenji",
        "hotel_name": "Conrad Tokyo",
        "location": "Tokyo, Japan",
        "check_in": 1,
        "check_out": 5,
        "background_image": "https://images.unsplash.com/photo-1540959733332-eab4deabeeaf?q=80&w=2094&auto=format&fit=crop",
    },
}

# (id, name, type, category, icon, description)
MOCK_ATTRACTIONS: Dict[str, List[tuple]] = {
    "1001": [
        (101, "Hyde Park", "Park", NEARBY, "park", "Massive green space right at your doorstep."),
        (102, "Paddington Basin", "Canal", NEARBY, "water", "Modern waterside dining and boat trips."),
        (103, "Oxford Street", "Shopping", NEARBY, "shopping_bag", "Europe's busiest shopping street."),
        (104, "London Eye", "Landmark", MUST_SEE, "attractions", "Observation wheel on the South Bank."),
        (105, "Big Ben", "Landmark", MUST_SEE, "schedule", "The Great Bell of the striking clock."),
        (106, "British Museum", "Culture", MUST_SEE, "museum", "Human history, art and culture."),
    ],
    "1002": [
        (1, "Qiantan Taikoo Li", "Luxury Shopping", NEARBY, "shopping_bag", "Open-plan wellness-themed retail complex."),
        (2, "Oriental Sports Center", "Arena", NEARBY, "stadium", 'Iconic sporting venue also known as the "Sea Crown".'),
        (3, "West Bund Art Center", "Art Gallery", NEARBY, "palette", "Contemporary art exhibitions."),
        (4, "The Bund", "Waterfront", MUST_SEE, "camera_alt", "Famous waterfront promenade."),
        (5, "Shanghai Tower", "Skyscraper", MUST_SEE, "visibility", "Tallest building in China."),
        (6, "Yu Garden", "Classical Garden", MUST_SEE, "temple_buddhist", "Classical Chinese garden."),
    ],
    "1003": [
        (201, "House Reef", "Nature", NEARBY, "scuba_diving", "Vibrant coral reef teeming with marine life."),
        (202, "Sunset Bar", "Dining", NEARBY, "cocktail_bell", "Overwater bar with perfect sunset views."),
        (203, "Aqua Wellness", "Spa", NEARBY, "spa", "Hydrotherapy pool."),
        (204, "Male City Tour", "Culture", MUST_SEE, "location_city", "The capital city of Maldives."),
        (205, "Sandbank Picnic", "Adventure", MUST_SEE, "umbrella", "Private picnic on a secluded sandbank."),
        (206, "Dolphin Cruise", "Wildlife", MUST_SEE, "sailing", "Sunset cruise to spot dolphins."),
    ],
    "1004": [
        (301, "Jiefangbei Square", "Shopping", NEARBY, "shopping_bag", "The central business district and heart of Chongqing."),
        (302, "Hongya Cave", "Landmark", MUST_SEE, "castle", "Stunning stilt house complex lit up at night."),
        (303, "Spicy Hot Pot", "Dining", NEARBY, "restaurant", "Authentic Chongqing mala hot pot experience."),
        (304, "Liziba Station", "Transport", MUST_SEE, "train", "Famous light rail train passing through a building."),
        (305, "Yangtze River Cableway", "Adventure", MUST_SEE, "cable_car", "Scenic ride across the Yangtze River."),
        (306, "Raffles City", "Architecture", NEARBY, "apartment", "Futuristic skyscraper complex at the river confluence."),
    ],
    # 1005 has no curated list; its attractions are generated
}

PRESET_AVATARS = [
    "https://img.freepik.com/free-psd/3d-illustration-person-with-sunglasses_23-2149436188.jpg",
    "https://img.freepik.com/free-psd/3d-illustration-person-with-pink-hair_23-2149436186.jpg",
    "https://img.freepik.com/free-psd/3d-illustration-person-with-glasses_23-2149436191.jpg",
    "https://img.freepik.com/free-psd/3d-illustration-person_23-2149436192.jpg",
]


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def trip_status(today: Union[date, datetime], check_in: date, check_out: date) -> TripStatus:
    """Calendar-date comparison; the check-in and check-out days count as during the stay"""
    today = _as_date(today)
    if today < _as_date(check_in):
        return TripStatus.UPCOMING
    if today <= _as_date(check_out):
        return TripStatus.DURING_STAY
    return TripStatus.COMPLETED


class BookingDirectory:
    """
    Lookup boundary for reservations.

    Usage:
        directory = BookingDirectory()
        booking = directory.validate_user("1002", "Anderson")
        status = directory.get_trip_status(booking)
    """

    def __init__(self, today: Optional[date] = None):
        self._fixed_today = today

    def today(self) -> date:
        return self._fixed_today or date.today()

    def validate_user(self, order_id: str, name: str = "") -> Optional[Booking]:
        """Look up a booking by order id. The name is not checked against the reservation."""
        record = MOCK_BOOKINGS.get((order_id or "").strip())
        if record is None:
            logger.info(f"No booking found for order {order_id!r}")
            return None

        today = self.today()
        return Booking(
            order_id=order_id.strip(),
            guest_name=record["guest_name"],
            first_name=record["first_name"],
            hotel_name=record["hotel_name"],
            location=record["location"],
            check_in_date=today + timedelta(days=record["check_in"]),
            check_out_date=today + timedelta(days=record["check_out"]),
            background_image=record["background_image"],
        )

    def get_trip_status(self, booking: Booking) -> TripStatus:
        return trip_status(self.today(), booking.check_in_date, booking.check_out_date)

    def attractions_for(self, order_id: str) -> Optional[List[Attraction]]:
        """Curated list for the booking, or None when it has to be generated"""
        rows = MOCK_ATTRACTIONS.get(order_id)
        if not rows:
            return None
        return [
            Attraction(id=aid, name=name, type=kind, category=category, icon=icon, description=description)
            for aid, name, kind, category, icon, description in rows
        ]
