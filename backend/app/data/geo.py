"""Bangladesh districts and thanas used as delivery destinations.

Districts are keyed by a lowercase English slug. Thanas are listed for the
districts with the most orders; every other district exposes its Sadar thana.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

DHAKA_DISTRICT_ID = "dhaka"


@dataclass(frozen=True)
class District:
    id: str
    name: str
    name_en: str
    division: str


@dataclass(frozen=True)
class Thana:
    id: str
    district_id: str
    name: str
    name_en: str


_DISTRICT_ROWS = [
    # Dhaka division
    ("dhaka", "ঢাকা", "Dhaka", "Dhaka"),
    ("gazipur", "গাজীপুর", "Gazipur", "Dhaka"),
    ("narayanganj", "নারায়ণগঞ্জ", "Narayanganj", "Dhaka"),
    ("narsingdi", "নরসিংদী", "Narsingdi", "Dhaka"),
    ("manikganj", "মানিকগঞ্জ", "Manikganj", "Dhaka"),
    ("munshiganj", "মুন্সিগঞ্জ", "Munshiganj", "Dhaka"),
    ("tangail", "টাঙ্গাইল", "Tangail", "Dhaka"),
    ("kishoreganj", "কিশোরগঞ্জ", "Kishoreganj", "Dhaka"),
    ("faridpur", "ফরিদপুর", "Faridpur", "Dhaka"),
    ("gopalganj", "গোপালগঞ্জ", "Gopalganj", "Dhaka"),
    ("madaripur", "মাদারীপুর", "Madaripur", "Dhaka"),
    ("rajbari", "রাজবাড়ী", "Rajbari", "Dhaka"),
    ("shariatpur", "শরীয়তপুর", "Shariatpur", "Dhaka"),
    # Chattogram division
    ("chattogram", "চট্টগ্রাম", "Chattogram", "Chattogram"),
    ("coxs-bazar", "কক্সবাজার", "Cox's Bazar", "Chattogram"),
    ("cumilla", "কুমিল্লা", "Cumilla", "Chattogram"),
    ("feni", "ফেনী", "Feni", "Chattogram"),
    ("noakhali", "নোয়াখালী", "Noakhali", "Chattogram"),
    ("lakshmipur", "লক্ষ্মীপুর", "Lakshmipur", "Chattogram"),
    ("chandpur", "চাঁদপুর", "Chandpur", "Chattogram"),
    ("brahmanbaria", "ব্রাহ্মণবাড়িয়া", "Brahmanbaria", "Chattogram"),
    ("rangamati", "রাঙ্গামাটি", "Rangamati", "Chattogram"),
    ("khagrachhari", "খাগড়াছড়ি", "Khagrachhari", "Chattogram"),
    ("bandarban", "বান্দরবান", "Bandarban", "Chattogram"),
    # Rajshahi division
    ("rajshahi", "রাজশাহী", "Rajshahi", "Rajshahi"),
    ("bogura", "বগুড়া", "Bogura", "Rajshahi"),
    ("pabna", "পাবনা", "Pabna", "Rajshahi"),
    ("sirajganj", "সিরাজগঞ্জ", "Sirajganj", "Rajshahi"),
    ("natore", "নাটোর", "Natore", "Rajshahi"),
    ("naogaon", "নওগাঁ", "Naogaon", "Rajshahi"),
    ("chapainawabganj", "চাঁপাইনবাবগঞ্জ", "Chapainawabganj", "Rajshahi"),
    ("joypurhat", "জয়পুরহাট", "Joypurhat", "Rajshahi"),
    # Khulna division
    ("khulna", "খুলনা", "Khulna", "Khulna"),
    ("jashore", "যশোর", "Jashore", "Khulna"),
    ("satkhira", "সাতক্ষীরা", "Satkhira", "Khulna"),
    ("bagerhat", "বাগেরহাট", "Bagerhat", "Khulna"),
    ("kushtia", "কুষ্টিয়া", "Kushtia", "Khulna"),
    ("jhenaidah", "ঝিনাইদহ", "Jhenaidah", "Khulna"),
    ("magura", "মাগুরা", "Magura", "Khulna"),
    ("narail", "নড়াইল", "Narail", "Khulna"),
    ("chuadanga", "চুয়াডাঙ্গা", "Chuadanga", "Khulna"),
    ("meherpur", "মেহেরপুর", "Meherpur", "Khulna"),
    # Barishal division
    ("barishal", "বরিশাল", "Barishal", "Barishal"),
    ("patuakhali", "পটুয়াখালী", "Patuakhali", "Barishal"),
    ("bhola", "ভোলা", "Bhola", "Barishal"),
    ("pirojpur", "পিরোজপুর", "Pirojpur", "Barishal"),
    ("jhalokathi", "ঝালকাঠি", "Jhalokathi", "Barishal"),
    ("barguna", "বরগুনা", "Barguna", "Barishal"),
    # Sylhet division
    ("sylhet", "সিলেট", "Sylhet", "Sylhet"),
    ("moulvibazar", "মৌলভীবাজার", "Moulvibazar", "Sylhet"),
    ("habiganj", "হবিগঞ্জ", "Habiganj", "Sylhet"),
    ("sunamganj", "সুনামগঞ্জ", "Sunamganj", "Sylhet"),
    # Rangpur division
    ("rangpur", "রংপুর", "Rangpur", "Rangpur"),
    ("dinajpur", "দিনাজপুর", "Dinajpur", "Rangpur"),
    ("kurigram", "কুড়িগ্রাম", "Kurigram", "Rangpur"),
    ("gaibandha", "গাইবান্ধা", "Gaibandha", "Rangpur"),
    ("nilphamari", "নীলফামারী", "Nilphamari", "Rangpur"),
    ("lalmonirhat", "লালমনিরহাট", "Lalmonirhat", "Rangpur"),
    ("thakurgaon", "ঠাকুরগাঁও", "Thakurgaon", "Rangpur"),
    ("panchagarh", "পঞ্চগড়", "Panchagarh", "Rangpur"),
    # Mymensingh division
    ("mymensingh", "ময়মনসিংহ", "Mymensingh", "Mymensingh"),
    ("jamalpur", "জামালপুর", "Jamalpur", "Mymensingh"),
    ("netrokona", "নেত্রকোণা", "Netrokona", "Mymensingh"),
    ("sherpur", "শেরপুর", "Sherpur", "Mymensingh"),
]

_THANA_ROWS = {
    "dhaka": [
        ("dhanmondi", "ধানমন্ডি", "Dhanmondi"),
        ("gulshan", "গুলশান", "Gulshan"),
        ("mirpur", "মিরপুর", "Mirpur"),
        ("mohammadpur", "মোহাম্মদপুর", "Mohammadpur"),
        ("uttara", "উত্তরা", "Uttara"),
        ("motijheel", "মতিঝিল", "Motijheel"),
        ("tejgaon", "তেজগাঁও", "Tejgaon"),
        ("savar", "সাভার", "Savar"),
        ("keraniganj", "কেরানীগঞ্জ", "Keraniganj"),
        ("dhamrai", "ধামরাই", "Dhamrai"),
    ],
    "gazipur": [
        ("sadar", "গাজীপুর সদর", "Gazipur Sadar"),
        ("tongi", "টঙ্গী", "Tongi"),
        ("kaliakair", "কালিয়াকৈর", "Kaliakair"),
        ("sreepur", "শ্রীপুর", "Sreepur"),
    ],
    "narayanganj": [
        ("sadar", "নারায়ণগঞ্জ সদর", "Narayanganj Sadar"),
        ("siddhirganj", "সিদ্ধিরগঞ্জ", "Siddhirganj"),
        ("rupganj", "রূপগঞ্জ", "Rupganj"),
    ],
    "chattogram": [
        ("kotwali", "কোতোয়ালী", "Kotwali"),
        ("panchlaish", "পাঁচলাইশ", "Panchlaish"),
        ("double-mooring", "ডবলমুরিং", "Double Mooring"),
        ("hathazari", "হাটহাজারী", "Hathazari"),
        ("patiya", "পটিয়া", "Patiya"),
    ],
    "sylhet": [
        ("sadar", "সিলেট সদর", "Sylhet Sadar"),
        ("beanibazar", "বিয়ানীবাজার", "Beanibazar"),
        ("golapganj", "গোলাপগঞ্জ", "Golapganj"),
    ],
}

DISTRICTS: List[District] = [District(*row) for row in _DISTRICT_ROWS]
_DISTRICTS_BY_ID: Dict[str, District] = {d.id: d for d in DISTRICTS}


def _build_thanas() -> Dict[str, List[Thana]]:
    thanas: Dict[str, List[Thana]] = {}
    for district in DISTRICTS:
        rows = _THANA_ROWS.get(district.id)
        if rows is None:
            rows = [("sadar", f"{district.name} সদর", f"{district.name_en} Sadar")]
        thanas[district.id] = [
            Thana(id=f"{district.id}-{slug}", district_id=district.id, name=name, name_en=name_en)
            for slug, name, name_en in rows
        ]
    return thanas


_THANAS_BY_DISTRICT = _build_thanas()


def get_district(district_id: str) -> Optional[District]:
    return _DISTRICTS_BY_ID.get(district_id)


def search_districts(query: str = "") -> List[District]:
    """Case-insensitive match on either the Bangla or the English name."""
    q = (query or "").strip().lower()
    if not q:
        return list(DISTRICTS)
    return [d for d in DISTRICTS if q in d.name.lower() or q in d.name_en.lower()]


def get_thanas_by_district(district_id: str) -> List[Thana]:
    return list(_THANAS_BY_DISTRICT.get(district_id, []))


def get_thana(district_id: str, thana_id: str) -> Optional[Thana]:
    for thana in _THANAS_BY_DISTRICT.get(district_id, []):
        if thana.id == thana_id:
            return thana
    return None


def is_dhaka_district(district_id: str) -> bool:
    return district_id == DHAKA_DISTRICT_ID
