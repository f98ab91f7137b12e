"""
Music commerce constants - enumerations shared by schemas and the resource registry.
"""

from enum import Enum

# Identifiers are 24 lowercase hex characters, as the repository stores them
OBJECT_ID_PATTERN = r"^[0-9a-f]{24}$"

# Brazilian postal code (CEP)
POSTAL_CODE_PATTERN = r"^[0-9]{5}-[0-9]{3}$"

# Record duration as minutes:seconds
DURATION_PATTERN = r"^[0-9]{1,3}:[0-5][0-9]$"

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

MIN_RELEASE_YEAR = 1800


class PaymentType(str, Enum):
    PIX = "Pix"
    BOLETO = "Boleto"
    CREDITO = "Cartão de Crédito"
    DEBITO = "Cartão de Débito"


class PaymentProvider(str, Enum):
    VISA = "Visa"
    MASTER = "Master Card"
    AMEX = "American Express"
    ELO = "Elo"
    DINERS = "Diners Club"
    HIPER = "Hipercard"


class AlbumFormat(str, Enum):
    CD = "cd"
    TAPE = "tape"
    VINYL = "vinyl"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHERS = "Others"


class MusicGenre(str, Enum):
    BLUES = "Blues"
    CLASSICAL = "Classical"
    COUNTRY = "Country"
    ELECTRONIC = "Electronic"
    FOLK = "Folk"
    FORRO = "Forró"
    FUNK = "Funk"
    HIP_HOP = "Hip Hop"
    JAZZ = "Jazz"
    MPB = "MPB"
    METAL = "Metal"
    POP = "Pop"
    PUNK = "Punk"
    REGGAE = "Reggae"
    RNB = "R&B"
    ROCK = "Rock"
    SAMBA = "Samba"
    SERTANEJO = "Sertanejo"
    SOUL = "Soul"


BRAZIL_STATES = {
    "RO": "Rondônia",
    "AC": "Acre",
    "AM": "Amazonas",
    "RR": "Roraima",
    "PA": "Pará",
    "AP": "Amapá",
    "TO": "Tocantins",
    "MA": "Maranhão",
    "PI": "Piauí",
    "CE": "Ceará",
    "RN": "Rio Grande do Norte",
    "PB": "Paraíba",
    "PE": "Pernambuco",
    "AL": "Alagoas",
    "SE": "Sergipe",
    "BA": "Bahia",
    "MG": "Minas Gerais",
    "ES": "Espírito Santo",
    "RJ": "Rio de Janeiro",
    "SP": "São Paulo",
    "PR": "Paraná",
    "SC": "Santa Catarina",
    "RS": "Rio Grande do Sul",
    "MS": "Mato Grosso do Sul",
    "MT": "Mato Grosso",
    "GO": "Goiás",
    "DF": "Distrito Federal",
}

# ISO 639-1 codes accepted as record language
LANGUAGES = frozenset("""
aa ab ae af ak am an ar as av ay az ba be bg bh bi bm bn bo br bs ca ce ch co
cr cs cu cv cy da de dv ee el en eo es et eu fa ff fi fj fo fr fy ga gd gl gn
gu gv ha he hi ho hr ht hu hy hz ia id ie ig ii ik io is it iu ja jv ka kg ki
kj kk kl km kn ko kr ks ku kv kw ky la lb lg li ln lo lt lu lv mg mh mi mk ml
mn mr ms mt my na nb nd ne ng nl nn no nr nv ny oc oj om or os pa pi pl ps pt
qu rm rn ro ru rw sa sc sd se sg si sk sl sm sn so sq sr ss st su sv sw ta te
tg th ti tk tl tn to tr ts tt tw ty ug uk ur uz ve vi vo wa wo xh yi yo za zh
""".split())
