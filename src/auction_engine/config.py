from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
AUCTION_DATA_DIR = PROJECT_ROOT / "data" / "auction"
EXPORTS_DIR = PROJECT_ROOT / "data" / "exports"

# Purse per franchise, in lakhs
STARTING_BUDGET = 50.00

# Category rules, most scarce first
CATEGORY_QUOTAS = {"A+": 2, "A": 3, "B": 2, "C": 4}
CATEGORY_BASE_PRICES = {"A+": 5.00, "A": 3.00, "B": 2.00, "C": 1.00}
CATEGORY_RETENTION_PRICES = {"A+": 20.00, "A": 13.00, "B": 8.00, "C": 3.50}
CATEGORY_RANKS = {"A+": 1, "A": 2, "B": 3, "C": 4}
CATEGORY_LABELS = {"A+": "PLATINUM", "A": "GOLD", "B": "SILVER", "C": "BRONZE"}
CATEGORY_RATINGS = {"A+": 95, "A": 85, "B": 75, "C": 65}

# Bid step as a fraction of the category base price
BID_INCREMENT_RATE = 0.10

# Owners are retained by their own franchise at this multiple of base price
OWNER_RETENTION_MULTIPLIER = 2.5

PLAYER_SKILLS = ("Batter", "Bowler", "All-Rounder", "WK-Batter")

DEFAULT_FRANCHISES = [
    {"franchise_id": "F1", "name": "Sagar", "color": "#004BA0", "icon": "lion"},
    {"franchise_id": "F2", "name": "Harsh", "color": "#FFD700", "icon": "tiger"},
    {"franchise_id": "F3", "name": "Devendra", "color": "#EC1C24", "icon": "fire"},
    {"franchise_id": "F4", "name": "Kartik", "color": "#3A225D", "icon": "warrior"},
    {"franchise_id": "F5", "name": "Raju Bhai", "color": "#FF822E", "icon": "eagle"},
    {"franchise_id": "F6", "name": "Murli L", "color": "#00008B", "icon": "shield"},
]

DEFAULT_PLAYER_POOL = {
    "A+": [
        "Yash", "Raj", "Rishi", "Amit S", "Amey", "Kalp", "Dipesh", "Khush",
        "Jigar shah", "Viral Dodia", "Sagar", "Harsh",
    ],
    "A": [
        "Ashu P", "Alok", "Bhupesh", "Shiva", "Devendra", "Kartik", "Pareen",
        "Jigar Joshi", "Parv", "Maheer", "Prashant", "Viral Shah", "Bhavin",
        "Nimesh", "Arjun", "Lomesh", "Jasmin", "Prakash",
    ],
    "B": [
        "Amit gold", "Sandeep I", "Krishna", "Dhruv", "Akshay patel", "Tirth",
        "Ketan", "Jainam", "Chintan", "Mukesh K", "Royston", "Sachin Gopani",
    ],
    "C": [
        "Pranav", "Vinit", "Niraj", "Raju Bhai", "Murli L", "Sanyam", "Rajeev",
        "Mital", "Amol", "Parth Doshi", "Mrugesh", "Sushant", "Varun",
        "Dr Keyur", "Aryan", "Carlton", "Yash K", "Mihir", "vipul", "Pushkar",
        "Sachin shah", "Rushabh", "Purvesh", "Parag K",
    ],
}

# Drawn first, in this order, before random selection
MARQUEE_ORDER = [
    "Yash", "Raj", "Rishi", "Amit S", "Amey",
    "Kalp", "Dipesh", "Khush", "Jigar shah", "Viral Dodia",
]
