"""Built-in catalog contents used when nothing has been saved yet."""

from typing import List

from ..models.client import Client
from ..models.product import Product
from ..models.symbol import Symbol

# (id, name, latin name, default symbol)
_PRODUCT_ROWS = [
    ("1", "ABADEJO", "EPINEPHELUS ALEXANDRINUS", Symbol.CRATE),
    ("2", "ABARDILLO", "POLYPRION AMERICANUS", Symbol.CRATE),
    ("3", "ACEDIAS", "DICOLOGLOSSA SPP", Symbol.CRATE),
    ("4", "ATUN ROJO", "THUNNUS THYNNUS", Symbol.CRATE),
    ("5", "BESUGO.PINTA", "PAGELLUS BOGARAVEO", Symbol.CRATE),
    ("6", "BONITO", "SARDA SARDA", Symbol.CRATE),
    ("7", "BOQUERONES", "ENGRAULIS ENCRASICOLUS", Symbol.CRATE),
    ("8", "BRECA", "PAGELLUS ERYTHRINUS", Symbol.CRATE),
    ("9", "BROTOLA", "PHYCIS PHYCIS", Symbol.CRATE),
    ("10", "CACHUCHU", "DENTEX MACROPHTALMUS", Symbol.CRATE),
    ("11", "CAZON", "GALEORHINUS GALEUS", Symbol.CRATE),
    ("12", "CHAMA", "DENTEX GIBBOSUS", Symbol.CRATE),
    ("13", "CHARGHO", "DIPLODUS SARGUS", Symbol.CRATE),
    ("14", "CORBINA", "ARGYROSOMUS REGIUS", Symbol.CRATE),
    ("15", "DORADA", "SPARUS AURATA", Symbol.CRATE),
    ("16", "F.GALLO", "ZENOPSIS CONCHIFER", Symbol.CRATE),
    ("17", "GALLO", "ZEUS FABER", Symbol.CRATE),
    ("18", "GALLINETA", "HELICOLENUS DACTYLOPTERUS", Symbol.CRATE),
    ("19", "HERRERA", "PAGELLUS MORMYRUS", Symbol.CRATE),
    ("20", "LENGUADO", "SOLEA VULGARIS", Symbol.CRATE),
    ("21", "MARRAJO", "ISURUS OXYRHINCHUS", Symbol.CRATE),
    ("22", "MELVA", "AUXIS THAZARD", Symbol.CRATE),
    ("23", "MERLUZA", "MERLUCCIUS MERLUCCIUS", Symbol.CRATE),
    ("24", "MERO", "EPINEPHELUS GUAZA", Symbol.CRATE),
    ("25", "PALOMETA NEGRA", "BRAMA BRAMA", Symbol.CRATE),
    ("26", "PALOMETA ROJA", "BERYX DECADACTYLUS", Symbol.CRATE),
    ("27", "PAMPANO", "HYPEROGLYPHE SPP", Symbol.CRATE),
    ("28", "PARGO", "PAGRUS PAGRUS", Symbol.CRATE),
    ("29", "PELUA", "CITHARUS LINGATULA", Symbol.CRATE),
    ("30", "PEZ.LIMON", "SERIOLA DUMERILI", Symbol.PIECE),
    ("31", "PEZ.ESPADA", "XIPHIAS GLADIUS", Symbol.CRATE),
    ("32", "RAPE", "LOPHIUS PISCATORIUS", Symbol.CRATE),
    ("33", "RASCASSE", "SCORPAENA PORCUS", Symbol.CRATE),
    ("34", "RAYA", "RAJA SPP", Symbol.CRATE),
    ("35", "ROBALO", "DICENTRARCHUS LABRAX", Symbol.CRATE),
    ("36", "RODABALLO", "PSETTA MAXIMA", Symbol.CRATE),
    ("37", "SABLE", "LEPIDOPUS CAUDATUS", Symbol.CRATE),
    ("38", "SAFIO", "CONGER CONGER", Symbol.CRATE),
    ("39", "SALMONETE", "MULLUS SURMULETUS", Symbol.CRATE),
    ("40", "ALMENDRITAS", "SEPIA ELEGANS", Symbol.CRATE),
    ("41", "CALAMARS", "LOLIGO VULGARIS", Symbol.CRATE),
    ("42", "CHOCOS", "SEPIA OFFICINALIS", Symbol.CRATE),
    ("43", "PUNTILLAS", "ALLOTEUTHIS MEDIA", Symbol.CRATE),
]

DEFAULT_PRODUCTS: List[Product] = [
    Product(id=pid, name=name, latin_name=latin, default_symbol=symbol)
    for pid, name, latin, symbol in _PRODUCT_ROWS
]

DEFAULT_CLIENTS: List[Client] = [
    Client(id="c1", name="APERITIVOS INAKI S.L", address="Avda. Canteras 23/25 28343 Valdemoro Madrid Espagne"),
    Client(id="c2", name="PESCNORT MAR SL", address="C/MASET N° 4   46460  SILLA       VALENCIA           ESPAGNE"),
    Client(id="c3", name="PETACA CHICO SL", address="CONIL   (CADIZ)          ESPAGNE"),
]

DEFAULT_TRANSPORTS: List[str] = ["DAMJI TRANS SARL", "TRANSPORT MOUNIR", "MARTRANS"]

INCOTERMS: List[str] = ["EXW", "FCA", "CPT", "CIP", "DAP", "DPU", "DDP", "FAS", "FOB", "CFR", "CIF"]
