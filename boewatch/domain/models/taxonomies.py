"""Category and province taxonomies used by BOE asset records.

Every taxonomy is a closed enumeration plus two static tables: the Spanish
display name of each member and the source labels that parse to it. Parsing
goes through :func:`~boewatch.domain.models.normalize.normalize`, so it is
case, space and accent insensitive. An empty label resolves to the
taxonomy's default member; any other unmatched label raises
:class:`~boewatch.domain.models.normalize.InvalidLabelError`. ``UNKNOWN`` and
``ALL`` exist for filtering and are never produced as a parse fallback.
"""

from __future__ import annotations

from enum import Enum

from .normalize import build_label_index, lookup_label


class PropertyCategory(str, Enum):
    APARTMENT = "apartment"
    BUILDING_SITE = "building_site"
    BUSINESS_PREMISES = "business_premises"
    GARAGE = "garage"
    INDUSTRIAL = "industrial"
    OTHER = "other"
    RUSTIC = "rustic"
    STORAGE = "storage"
    UNKNOWN = "unknown"
    ALL = "all"

    @property
    def display(self) -> str:
        return _PROPERTY_TABLE[self][0]

    @classmethod
    def from_string(cls, text: str) -> "PropertyCategory":
        if not text.strip():
            return cls.APARTMENT
        return lookup_label(_PROPERTY_INDEX, "property category", text)


_PROPERTY_TABLE: dict[PropertyCategory, tuple[str, ...]] = {
    PropertyCategory.APARTMENT: ("Vivienda",),
    PropertyCategory.BUILDING_SITE: ("Solar",),
    PropertyCategory.BUSINESS_PREMISES: ("Local comercial",),
    PropertyCategory.GARAGE: ("Garaje",),
    PropertyCategory.INDUSTRIAL: ("Nave industrial",),
    PropertyCategory.OTHER: ("Otro", "Otros"),
    PropertyCategory.RUSTIC: ("Finca rústica",),
    PropertyCategory.STORAGE: ("Trastero",),
    PropertyCategory.UNKNOWN: ("Desconocido",),
    PropertyCategory.ALL: ("Todos",),
}


class VehicleCategory(str, Enum):
    CAR = "car"
    INDUSTRIAL = "industrial"
    OTHER = "other"
    UNKNOWN = "unknown"
    ALL = "all"

    @property
    def display(self) -> str:
        return _VEHICLE_TABLE[self][0]

    @classmethod
    def from_string(cls, text: str) -> "VehicleCategory":
        if not text.strip():
            return cls.CAR
        return lookup_label(_VEHICLE_INDEX, "vehicle category", text)


_VEHICLE_TABLE: dict[VehicleCategory, tuple[str, ...]] = {
    VehicleCategory.CAR: ("Turismo", "Turismos"),
    VehicleCategory.INDUSTRIAL: ("Vehículo industrial", "Industriales", "Industrial"),
    VehicleCategory.OTHER: ("Otros", "Otro"),
    VehicleCategory.UNKNOWN: ("Desconocido",),
    VehicleCategory.ALL: ("Todos",),
}


class OtherCategory(str, Enum):
    AIRPLANE = "airplane"
    ANIMALS = "animals"
    ANTIQUES = "antiques"
    COMPUTERS = "computers"
    CONCESSIONS = "concessions"
    CREDITS = "credits"
    FURNITURE = "furniture"
    INTELLECTUAL_PROPERTY = "intellectual_property"
    MACHINERY = "machinery"
    MATERIALS = "materials"
    MERCHANDISE = "merchandise"
    OTHER = "other"
    OTHER_RIGHTS = "other_rights"
    PLANT = "plant"
    SHARES = "shares"
    TOOLS = "tools"
    TRANSFER_RIGHTS = "transfer_rights"
    VESSEL = "vessel"
    UNKNOWN = "unknown"
    ALL = "all"

    @property
    def display(self) -> str:
        return _OTHER_TABLE[self][0]

    @classmethod
    def from_string(cls, text: str) -> "OtherCategory":
        if not text.strip():
            return cls.OTHER
        return lookup_label(_OTHER_INDEX, "other category", text)


_OTHER_TABLE: dict[OtherCategory, tuple[str, ...]] = {
    OtherCategory.AIRPLANE: ("Aeronaves", "Aeronave"),
    OtherCategory.ANIMALS: ("Animales",),
    OtherCategory.ANTIQUES: ("Joyas, obras de arte y antigüedades",),
    OtherCategory.COMPUTERS: ("Equipos informáticos",),
    OtherCategory.CONCESSIONS: ("Concesiones administrativas",),
    OtherCategory.CREDITS: ("Créditos y derechos de cobro",),
    OtherCategory.FURNITURE: ("Mobiliario",),
    OtherCategory.INTELLECTUAL_PROPERTY: ("Propiedad industrial e intelectual",),
    OtherCategory.MACHINERY: ("Maquinaria",),
    OtherCategory.MATERIALS: ("Materiales",),
    OtherCategory.MERCHANDISE: ("Mercancías",),
    OtherCategory.OTHER: ("Otros", "Otro"),
    OtherCategory.OTHER_RIGHTS: ("Otros bienes y derechos",),
    OtherCategory.PLANT: ("Instalaciones",),
    OtherCategory.SHARES: ("Acciones y participaciones",),
    OtherCategory.TOOLS: ("Utensilios y herramientas",),
    OtherCategory.TRANSFER_RIGHTS: ("Derechos de traspaso",),
    OtherCategory.VESSEL: ("Buques", "Buque"),
    OtherCategory.UNKNOWN: ("Desconocido",),
    OtherCategory.ALL: ("Todos",),
}


class Province(str, Enum):
    A_CORUNA = "a_coruna"
    ALAVA = "alava"
    ALBACETE = "albacete"
    ALICANTE = "alicante"
    ALMERIA = "almeria"
    ASTURIAS = "asturias"
    AVILA = "avila"
    BADAJOZ = "badajoz"
    BALEARES = "baleares"
    BARCELONA = "barcelona"
    BIZKAIA = "bizkaia"
    BURGOS = "burgos"
    CACERES = "caceres"
    CADIZ = "cadiz"
    CANTABRIA = "cantabria"
    CASTELLON = "castellon"
    CEUTA = "ceuta"
    CIUDAD_REAL = "ciudad_real"
    CORDOBA = "cordoba"
    CUENCA = "cuenca"
    GIPUZKOA = "gipuzkoa"
    GIRONA = "girona"
    GRANADA = "granada"
    GUADALAJARA = "guadalajara"
    HUELVA = "huelva"
    HUESCA = "huesca"
    JAEN = "jaen"
    LA_RIOJA = "la_rioja"
    LAS_PALMAS = "las_palmas"
    LEON = "leon"
    LLEIDA = "lleida"
    LUGO = "lugo"
    MADRID = "madrid"
    MALAGA = "malaga"
    MELILLA = "melilla"
    MURCIA = "murcia"
    NAVARRA = "navarra"
    OURENSE = "ourense"
    PALENCIA = "palencia"
    PONTEVEDRA = "pontevedra"
    SALAMANCA = "salamanca"
    SANTA_CRUZ_DE_TENERIFE = "santa_cruz_de_tenerife"
    SEGOVIA = "segovia"
    SEVILLA = "sevilla"
    SORIA = "soria"
    TARRAGONA = "tarragona"
    TERUEL = "teruel"
    TOLEDO = "toledo"
    VALENCIA = "valencia"
    VALLADOLID = "valladolid"
    ZAMORA = "zamora"
    ZARAGOZA = "zaragoza"
    UNKNOWN = "unknown"

    @property
    def display(self) -> str:
        return _PROVINCE_TABLE[self][0]

    @classmethod
    def from_string(cls, text: str) -> "Province":
        if not text.strip():
            return cls.UNKNOWN
        return lookup_label(_PROVINCE_INDEX, "province", text)


# First entry is the display name, the rest are spellings seen on the portal.
_PROVINCE_TABLE: dict[Province, tuple[str, ...]] = {
    Province.A_CORUNA: ("A Coruña", "La Coruña", "Coruña, A"),
    Province.ALAVA: ("Álava", "Araba/Álava", "Araba"),
    Province.ALBACETE: ("Albacete",),
    Province.ALICANTE: ("Alicante", "Alicante/Alacant", "Alacant"),
    Province.ALMERIA: ("Almería",),
    Province.ASTURIAS: ("Asturias",),
    Province.AVILA: ("Ávila",),
    Province.BADAJOZ: ("Badajoz",),
    Province.BALEARES: ("Illes Balears", "Baleares", "Islas Baleares", "Balears, Illes"),
    Province.BARCELONA: ("Barcelona",),
    Province.BIZKAIA: ("Bizkaia", "Vizcaya"),
    Province.BURGOS: ("Burgos",),
    Province.CACERES: ("Cáceres",),
    Province.CADIZ: ("Cádiz",),
    Province.CANTABRIA: ("Cantabria",),
    Province.CASTELLON: ("Castellón", "Castellón/Castelló", "Castelló"),
    Province.CEUTA: ("Ceuta",),
    Province.CIUDAD_REAL: ("Ciudad Real",),
    Province.CORDOBA: ("Córdoba",),
    Province.CUENCA: ("Cuenca",),
    Province.GIPUZKOA: ("Gipuzkoa", "Guipúzcoa"),
    Province.GIRONA: ("Girona", "Gerona"),
    Province.GRANADA: ("Granada",),
    Province.GUADALAJARA: ("Guadalajara",),
    Province.HUELVA: ("Huelva",),
    Province.HUESCA: ("Huesca",),
    Province.JAEN: ("Jaén",),
    Province.LA_RIOJA: ("La Rioja", "Rioja, La"),
    Province.LAS_PALMAS: ("Las Palmas", "Palmas, Las"),
    Province.LEON: ("León",),
    Province.LLEIDA: ("Lleida", "Lérida"),
    Province.LUGO: ("Lugo",),
    Province.MADRID: ("Madrid",),
    Province.MALAGA: ("Málaga",),
    Province.MELILLA: ("Melilla",),
    Province.MURCIA: ("Murcia",),
    Province.NAVARRA: ("Navarra", "Nafarroa"),
    Province.OURENSE: ("Ourense", "Orense"),
    Province.PALENCIA: ("Palencia",),
    Province.PONTEVEDRA: ("Pontevedra",),
    Province.SALAMANCA: ("Salamanca",),
    Province.SANTA_CRUZ_DE_TENERIFE: ("Santa Cruz de Tenerife",),
    Province.SEGOVIA: ("Segovia",),
    Province.SEVILLA: ("Sevilla",),
    Province.SORIA: ("Soria",),
    Province.TARRAGONA: ("Tarragona",),
    Province.TERUEL: ("Teruel",),
    Province.TOLEDO: ("Toledo",),
    Province.VALENCIA: ("Valencia", "Valencia/València", "València"),
    Province.VALLADOLID: ("Valladolid",),
    Province.ZAMORA: ("Zamora",),
    Province.ZARAGOZA: ("Zaragoza",),
    Province.UNKNOWN: ("Desconocida",),
}

_PROPERTY_INDEX = build_label_index(_PROPERTY_TABLE)
_VEHICLE_INDEX = build_label_index(_VEHICLE_TABLE)
_OTHER_INDEX = build_label_index(_OTHER_TABLE)
_PROVINCE_INDEX = build_label_index(_PROVINCE_TABLE)

__all__ = ["OtherCategory", "PropertyCategory", "Province", "VehicleCategory"]
