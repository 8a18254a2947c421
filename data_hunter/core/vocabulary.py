"""
Label vocabulary for field extraction.

Every extracted field has a set of label synonyms per language. The
extraction engine builds its patterns from these tables, so a new market
only needs new rows here.
"""

from typing import Dict, Iterable, List, Tuple

LANGUAGES: Tuple[str, ...] = ("en", "de", "fr", "nl", "it", "es", "da", "sv", "no", "pl", "pt")

TEXT_FIELDS: Tuple[str, ...] = ("ingredients", "allergens", "may_contain")

NUMERIC_FIELDS: Tuple[str, ...] = (
    "energy", "fat", "saturates", "carbs", "sugars", "protein", "fiber", "salt",
)

# Units a numeric field must carry to be accepted
NUMERIC_UNITS: Dict[str, Tuple[str, ...]] = {
    "energy": ("kcal", "kj"),
    **{field: ("mg", "g") for field in NUMERIC_FIELDS if field != "energy"},
}

WEIGHT_UNITS: Tuple[str, ...] = ("kg", "ml", "cl", "oz", "g", "l")

FIELD_SYNONYMS: Dict[str, Dict[str, Tuple[str, ...]]] = {
    "ingredients": {
        "en": ("ingredients", "ingredient list"),
        "de": ("zutaten", "zutatenliste"),
        "fr": ("ingrédients", "ingredients", "composition"),
        "nl": ("ingrediënten", "ingredienten"),
        "it": ("ingredienti",),
        "es": ("ingredientes",),
        "da": ("ingredienser",),
        "sv": ("ingredienser",),
        "no": ("ingredienser",),
        "pl": ("składniki", "skladniki"),
        "pt": ("ingredientes",),
    },
    "allergens": {
        "en": ("allergens", "allergy advice", "allergy information", "allergen information"),
        "de": ("allergene", "allergiehinweise", "allergiehinweis", "allergeninformationen"),
        "fr": ("allergènes", "allergenes"),
        "nl": ("allergenen", "allergie-informatie"),
        "it": ("allergeni",),
        "es": ("alérgenos", "alergenos"),
        "da": ("allergener",),
        "sv": ("allergener",),
        "no": ("allergener",),
        "pl": ("alergeny",),
        "pt": ("alergénios", "alergênicos", "alérgenos"),
    },
    "may_contain": {
        "en": ("may contain traces of", "may contain", "may also contain"),
        "de": ("kann spuren von", "kann spuren", "kann enthalten", "spuren von"),
        "fr": ("peut contenir des traces de", "peut contenir", "traces éventuelles"),
        "nl": ("kan sporen bevatten van", "kan sporen van", "kan sporen", "kan bevatten"),
        "it": ("può contenere tracce di", "può contenere", "puo contenere"),
        "es": ("puede contener trazas de", "puede contener"),
        "da": ("kan indeholde",),
        "sv": ("kan innehålla",),
        "no": ("kan inneholde",),
        "pl": ("może zawierać", "moze zawierac"),
        "pt": ("pode conter",),
    },
    "weight": {
        "en": ("net weight", "net wt", "net contents", "weight", "contents"),
        "de": ("nettogewicht", "nettofüllmenge", "füllmenge", "gewicht", "inhalt"),
        "fr": ("poids net", "poids", "contenance"),
        "nl": ("netto gewicht", "nettogewicht", "gewicht", "inhoud"),
        "it": ("peso netto", "peso"),
        "es": ("peso neto", "contenido neto", "peso"),
        "da": ("nettovægt", "vægt", "indhold"),
        "sv": ("nettovikt", "vikt"),
        "no": ("nettovekt", "vekt"),
        "pl": ("masa netto", "waga netto", "waga"),
        "pt": ("peso líquido", "peso liquido", "peso"),
    },
    "energy": {
        "en": ("energy",),
        "de": ("energie", "brennwert", "energiewert"),
        "fr": ("énergie", "energie", "valeur énergétique"),
        "nl": ("energie", "energiewaarde"),
        "it": ("energia", "valore energetico"),
        "es": ("energía", "energia", "valor energético"),
        "da": ("energi",),
        "sv": ("energi", "energivärde"),
        "no": ("energi",),
        "pl": ("energia", "wartość energetyczna"),
        "pt": ("energia", "valor energético"),
    },
    "fat": {
        "en": ("fat", "total fat"),
        "de": ("fett",),
        "fr": ("matières grasses", "matieres grasses", "lipides"),
        "nl": ("vet", "vetten"),
        "it": ("grassi",),
        "es": ("grasas",),
        "da": ("fedt",),
        "sv": ("fett",),
        "no": ("fett",),
        "pl": ("tłuszcz", "tluszcz"),
        "pt": ("lípidos", "lipidos", "gorduras"),
    },
    "saturates": {
        "en": ("saturates", "saturated fat", "saturated fatty acids"),
        "de": ("gesättigte fettsäuren", "gesaettigte fettsaeuren"),
        "fr": ("acides gras saturés", "acides gras satures"),
        "nl": ("verzadigde vetzuren", "verzadigd vet"),
        "it": ("acidi grassi saturi",),
        "es": ("ácidos grasos saturados", "acidos grasos saturados", "saturadas"),
        "da": ("mættede fedtsyrer",),
        "sv": ("mättat fett", "mättade fettsyror"),
        "no": ("mettede fettsyrer",),
        "pl": ("kwasy tłuszczowe nasycone", "nasycone kwasy tłuszczowe"),
        "pt": ("ácidos gordos saturados", "saturados"),
    },
    "carbs": {
        "en": ("carbohydrates", "carbohydrate", "total carbohydrate"),
        "de": ("kohlenhydrate",),
        "fr": ("glucides",),
        "nl": ("koolhydraten",),
        "it": ("carboidrati",),
        "es": ("hidratos de carbono", "carbohidratos"),
        "da": ("kulhydrat", "kulhydrater"),
        "sv": ("kolhydrater", "kolhydrat"),
        "no": ("karbohydrater", "karbohydrat"),
        "pl": ("węglowodany", "weglowodany"),
        "pt": ("hidratos de carbono",),
    },
    "sugars": {
        "en": ("sugars", "of which sugars", "total sugars"),
        "de": ("davon zucker", "zucker"),
        "fr": ("dont sucres", "sucres"),
        "nl": ("waarvan suikers", "suikers"),
        "it": ("di cui zuccheri", "zuccheri"),
        "es": ("de los cuales azúcares", "azúcares", "azucares"),
        "da": ("heraf sukkerarter", "sukkerarter"),
        "sv": ("varav sockerarter", "sockerarter"),
        "no": ("hvorav sukkerarter", "sukkerarter"),
        "pl": ("w tym cukry", "cukry"),
        "pt": ("dos quais açúcares", "açúcares", "acucares"),
    },
    "protein": {
        "en": ("protein", "proteins"),
        "de": ("eiweiß", "eiweiss", "protein"),
        "fr": ("protéines", "proteines"),
        "nl": ("eiwitten", "eiwit"),
        "it": ("proteine",),
        "es": ("proteínas", "proteinas"),
        "da": ("protein",),
        "sv": ("protein",),
        "no": ("protein",),
        "pl": ("białko", "bialko"),
        "pt": ("proteínas", "proteinas"),
    },
    "fiber": {
        "en": ("fibre", "fiber", "dietary fibre", "dietary fiber"),
        "de": ("ballaststoffe",),
        "fr": ("fibres alimentaires", "fibres"),
        "nl": ("voedingsvezel", "vezels"),
        "it": ("fibre", "fibre alimentari"),
        "es": ("fibra alimentaria", "fibra"),
        "da": ("kostfibre",),
        "sv": ("kostfiber",),
        "no": ("kostfiber",),
        "pl": ("błonnik", "blonnik"),
        "pt": ("fibra",),
    },
    "salt": {
        "en": ("salt",),
        "de": ("salz",),
        "fr": ("sel",),
        "nl": ("zout",),
        "it": ("sale",),
        "es": ("sal",),
        "da": ("salt",),
        "sv": ("salt",),
        "no": ("salt",),
        "pl": ("sól", "sol"),
        "pt": ("sal",),
    },
}

# Section headers that end a free-text capture. Must not contain words that
# occur inside ingredient lists (salt, sugar, "fruit preparation").
SECTION_STOP_WORDS: Dict[str, Tuple[str, ...]] = {
    "en": ("nutrition", "nutritional information", "typical values", "storage",
           "directions", "best before", "manufacturer"),
    "de": ("nährwerte", "nährwertangaben", "nährwertinformationen", "durchschnittliche nährwerte",
           "aufbewahrung", "mindestens haltbar", "hersteller"),
    "fr": ("valeurs nutritionnelles", "informations nutritionnelles", "déclaration nutritionnelle",
           "conservation", "à consommer de préférence"),
    "nl": ("voedingswaarde", "voedingswaarden", "bewaren", "ten minste houdbaar"),
    "it": ("valori nutrizionali", "dichiarazione nutrizionale", "conservazione"),
    "es": ("información nutricional", "valores nutricionales", "conservación"),
    "da": ("næringsindhold", "næringsdeklaration", "opbevaring"),
    "sv": ("näringsvärde", "näringsinnehåll", "förvaring"),
    "no": ("næringsinnhold", "oppbevaring"),
    "pl": ("wartość odżywcza", "wartości odżywcze", "przechowywanie"),
    "pt": ("informação nutricional", "valores nutricionais", "conservação"),
}

# Prepositions that introduce a "per 100 g" nutrition table header
PER_100_WORDS: Tuple[str, ...] = ("per", "pro", "pour", "par", "por", "je", "na", "för", "pr.", "pr")

ORGANIC_MARKERS: Tuple[str, ...] = ("ÖKO", "OEKO", "OKO", "ØKO", "BIO", "ECO", "EKO", "ORG")


def synonyms(field: str, languages: Iterable[str]) -> List[str]:
    """Label synonyms for ``field`` across ``languages``, longest first, no duplicates."""
    table = FIELD_SYNONYMS[field]
    seen = []
    for language in languages:
        for word in table.get(language, ()):
            if word not in seen:
                seen.append(word)
    return sorted(seen, key=len, reverse=True)


def stop_words() -> List[str]:
    """Every label that ends a free-text capture, in all supported languages."""
    words: List[str] = []
    for language in LANGUAGES:
        words.extend(SECTION_STOP_WORDS.get(language, ()))
    for field in TEXT_FIELDS + ("energy",):
        words.extend(synonyms(field, LANGUAGES))
    return sorted(set(words), key=len, reverse=True)
