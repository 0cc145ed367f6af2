"""Seed data for demo listings (owned by the admin user)."""

AIRCRAFT = [
    {
        "slug": "1978-piper-archer-ii-low-time-engine",
        "title": "Low Time Engine",
        "description": "Well-kept Archer II with a mid-time airframe, fresh annual and a low time engine.",
        "price": "89500.00",
        "year": 1978,
        "make": "Piper",
        "model": "Archer II",
        "hours": 4210,
        "engine_type": "Lycoming O-360-A4M",
        "avionics": "Garmin GNS 430W, GTX 345, KAP 140",
        "airport_code": "KVRB",
        "city": "Vero Beach",
        "country": "USA",
        "status": "active",
    },
    {
        "slug": "2001-kitfox-5-outback-recently-restored",
        "title": "Recently Restored",
        "description": "Kitfox 5 Outback on tundra tires, restored in 2023.",
        "price": "108000.00",
        "year": 2001,
        "make": "Kitfox",
        "model": "5 Outback",
        "hours": 820,
        "engine_type": "Rotax 912 ULS",
        "avionics": "Dynon SkyView HDX",
        "airport_code": "KBJC",
        "city": "Broomfield",
        "country": "USA",
        "status": "draft",
    },
]
