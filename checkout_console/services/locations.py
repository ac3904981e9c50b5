"""Shipping location lookup and selection"""

from dataclasses import dataclass
from typing import Optional


COUNTRIES = [
    "Afghanistan", "Albania", "Algeria", "Argentina", "Australia", "Austria", "Bangladesh",
    "Belgium", "Brazil", "Canada", "Chile", "China", "Colombia", "Czech Republic", "Denmark",
    "Egypt", "Finland", "France", "Germany", "Greece", "Hungary", "India", "Indonesia",
    "Iran", "Iraq", "Ireland", "Israel", "Italy", "Japan", "Kenya", "Malaysia", "Mexico",
    "Netherlands", "New Zealand", "Nigeria", "Norway", "Pakistan", "Philippines", "Poland",
    "Portugal", "Romania", "Russia", "Saudi Arabia", "Singapore", "South Africa", "South Korea",
    "Spain", "Sweden", "Switzerland", "Thailand", "Turkey", "Ukraine", "United Arab Emirates",
    "United Kingdom", "United States", "Vietnam", "Other",
]

REGIONS_BY_COUNTRY: dict[str, list[str]] = {
    "Vietnam": [
        "Hanoi", "Ho Chi Minh City", "Da Nang", "Hai Phong", "Can Tho", "Hue",
        "Khanh Hoa", "Quang Ninh", "Lam Dong", "Binh Duong", "Dong Nai", "Ba Ria - Vung Tau",
    ],
    "United States": [
        "California", "Florida", "Illinois", "New York", "Texas", "Washington",
    ],
    "Australia": [
        "New South Wales", "Queensland", "South Australia", "Tasmania", "Victoria",
        "Western Australia",
    ],
    "Canada": ["Alberta", "British Columbia", "Ontario", "Quebec"],
    "China": ["Beijing", "Guangdong", "Shanghai", "Zhejiang"],
    "Japan": ["Hokkaido", "Kyoto", "Osaka", "Tokyo"],
    "South Korea": ["Busan", "Incheon", "Seoul"],
    "Thailand": ["Bangkok", "Chiang Mai", "Phuket"],
    "United Kingdom": ["England", "Northern Ireland", "Scotland", "Wales"],
    "Germany": ["Bavaria", "Berlin", "Hamburg", "Hesse"],
    "France": ["Auvergne-Rhone-Alpes", "Ile-de-France", "Provence-Alpes-Cote d'Azur"],
}


def regions_for(country: Optional[str]) -> list[str]:
    """Regions known for a country (empty when it has none)"""
    if not country:
        return []
    return list(REGIONS_BY_COUNTRY.get(country, []))


def compose_address(country: Optional[str], region: Optional[str]) -> str:
    """Shipping address text: "Region, Country", "Country" or empty"""
    if not country:
        return ""
    if region:
        return f"{region}, {country}"
    return country


@dataclass
class LocationSelection:
    """Country/region picked for the order's shipping address"""
    country: Optional[str] = None
    region: Optional[str] = None

    @property
    def shipping_address(self) -> str:
        return compose_address(self.country, self.region)

    @property
    def regions(self) -> list[str]:
        return regions_for(self.country)

    def select_country(self, country: Optional[str]) -> str:
        """Pick a country (None clears it); any region is dropped"""
        if country and country not in COUNTRIES:
            raise ValueError(f"Unknown country: {country}")
        self.country = country or None
        self.region = None
        return self.shipping_address

    def select_region(self, region: Optional[str]) -> str:
        """Pick a region of the selected country (None clears it)"""
        if region:
            if not self.country:
                raise ValueError("Select a country before choosing a region")
            if region not in regions_for(self.country):
                raise ValueError(f"Unknown region for {self.country}: {region}")
        self.region = region or None
        return self.shipping_address

    @classmethod
    def from_address(cls, address: Optional[str]) -> "LocationSelection":
        """Parse a stored shipping address back into a selection"""
        if not address:
            return cls()

        region, sep, country = address.rpartition(", ")
        if sep and country in COUNTRIES and region in regions_for(country):
            return cls(country=country, region=region)
        if address in COUNTRIES:
            return cls(country=address)
        return cls()
