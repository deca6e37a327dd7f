"""GEDCOM tag registry used as index keys by the record collections."""

from enum import Enum


class GedcomTag(str, Enum):
    """Known GEDCOM 5.5 tags. Unrecognized tags resolve to ``UNKNOWN``."""

    # Records
    HEAD = "HEAD"
    TRLR = "TRLR"
    INDI = "INDI"
    FAM = "FAM"
    SOUR = "SOUR"
    REPO = "REPO"
    NOTE = "NOTE"
    OBJE = "OBJE"
    SUBM = "SUBM"
    SUBN = "SUBN"

    # Header
    GEDC = "GEDC"
    VERS = "VERS"
    FORM = "FORM"
    CHAR = "CHAR"
    DEST = "DEST"
    FILE = "FILE"
    COPR = "COPR"
    LANG = "LANG"

    # Individual
    NAME = "NAME"
    GIVN = "GIVN"
    SURN = "SURN"
    NPFX = "NPFX"
    NSFX = "NSFX"
    NICK = "NICK"
    SEX = "SEX"
    FAMC = "FAMC"
    FAMS = "FAMS"
    ALIA = "ALIA"
    ASSO = "ASSO"
    RELA = "RELA"
    PEDI = "PEDI"

    # Individual events
    BIRT = "BIRT"
    CHR = "CHR"
    DEAT = "DEAT"
    BURI = "BURI"
    CREM = "CREM"
    ADOP = "ADOP"
    BAPM = "BAPM"
    BARM = "BARM"
    BASM = "BASM"
    BLES = "BLES"
    CHRA = "CHRA"
    CONF = "CONF"
    FCOM = "FCOM"
    ORDN = "ORDN"
    NATU = "NATU"
    EMIG = "EMIG"
    IMMI = "IMMI"
    CENS = "CENS"
    PROB = "PROB"
    WILL = "WILL"
    GRAD = "GRAD"
    RETI = "RETI"
    EVEN = "EVEN"

    # Individual attributes
    CAST = "CAST"
    DSCR = "DSCR"
    EDUC = "EDUC"
    IDNO = "IDNO"
    NATI = "NATI"
    NCHI = "NCHI"
    NMR = "NMR"
    OCCU = "OCCU"
    PROP = "PROP"
    RELI = "RELI"
    RESI = "RESI"
    SSN = "SSN"
    TITL = "TITL"
    FACT = "FACT"

    # Family
    HUSB = "HUSB"
    WIFE = "WIFE"
    CHIL = "CHIL"
    ANUL = "ANUL"
    DIV = "DIV"
    DIVF = "DIVF"
    ENGA = "ENGA"
    MARB = "MARB"
    MARC = "MARC"
    MARR = "MARR"
    MARL = "MARL"
    MARS = "MARS"

    # Event details
    DATE = "DATE"
    TIME = "TIME"
    PLAC = "PLAC"
    ADDR = "ADDR"
    AGE = "AGE"
    AGNC = "AGNC"
    CAUS = "CAUS"
    TYPE = "TYPE"

    # Sources and citations
    AUTH = "AUTH"
    PUBL = "PUBL"
    ABBR = "ABBR"
    TEXT = "TEXT"
    PAGE = "PAGE"
    QUAY = "QUAY"
    DATA = "DATA"
    CALN = "CALN"
    MEDI = "MEDI"
    ROLE = "ROLE"

    # Misc
    CONT = "CONT"
    CONC = "CONC"
    CHAN = "CHAN"
    REFN = "REFN"
    RIN = "RIN"
    AFN = "AFN"
    RFN = "RFN"
    PHON = "PHON"
    EMAIL = "EMAIL"
    WWW = "WWW"

    UNKNOWN = "UNKNOWN"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_text(cls, raw: str) -> "GedcomTag":
        """Resolve raw tag text to a registry member, ``UNKNOWN`` if not listed."""
        return _BY_TEXT.get((raw or "").strip().upper(), cls.UNKNOWN)


_BY_TEXT = {member.value: member for member in GedcomTag}


INDIVIDUAL_EVENT_TAGS = frozenset({
    GedcomTag.BIRT, GedcomTag.CHR, GedcomTag.DEAT, GedcomTag.BURI,
    GedcomTag.CREM, GedcomTag.ADOP, GedcomTag.BAPM, GedcomTag.BARM,
    GedcomTag.BASM, GedcomTag.BLES, GedcomTag.CHRA, GedcomTag.CONF,
    GedcomTag.FCOM, GedcomTag.ORDN, GedcomTag.NATU, GedcomTag.EMIG,
    GedcomTag.IMMI, GedcomTag.CENS, GedcomTag.PROB, GedcomTag.WILL,
    GedcomTag.GRAD, GedcomTag.RETI, GedcomTag.EVEN,
})

FAMILY_EVENT_TAGS = frozenset({
    GedcomTag.ANUL, GedcomTag.CENS, GedcomTag.DIV, GedcomTag.DIVF,
    GedcomTag.ENGA, GedcomTag.MARB, GedcomTag.MARC, GedcomTag.MARR,
    GedcomTag.MARL, GedcomTag.MARS, GedcomTag.EVEN,
})

INDIVIDUAL_ATTRIBUTE_TAGS = frozenset({
    GedcomTag.CAST, GedcomTag.DSCR, GedcomTag.EDUC, GedcomTag.IDNO,
    GedcomTag.NATI, GedcomTag.NCHI, GedcomTag.NMR, GedcomTag.OCCU,
    GedcomTag.PROP, GedcomTag.RELI, GedcomTag.RESI, GedcomTag.SSN,
    GedcomTag.TITL, GedcomTag.FACT,
})
