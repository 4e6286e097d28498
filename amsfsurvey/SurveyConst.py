'''
See COPYRIGHT.md for copyright information.
'''
from __future__ import annotations

xsd = "http://www.w3.org/2001/XMLSchema"
xsi = "http://www.w3.org/2001/XMLSchema-instance"
xbrli = "http://www.xbrl.org/2003/instance"
link = "http://www.xbrl.org/2003/linkbase"
xlink = "http://www.w3.org/1999/xlink"
xbrldi = "http://xbrl.org/2006/xbrldi"
iso4217 = "http://www.xbrl.org/2003/iso4217"

# clark notation of the xlink attributes read from linkbases
xlinkHref = "{http://www.w3.org/1999/xlink}href"
xlinkLabel = "{http://www.w3.org/1999/xlink}label"
xlinkRole = "{http://www.w3.org/1999/xlink}role"
xlinkArcrole = "{http://www.w3.org/1999/xlink}arcrole"
xlinkFrom = "{http://www.w3.org/1999/xlink}from"
xlinkTo = "{http://www.w3.org/1999/xlink}to"
xlinkType = "{http://www.w3.org/1999/xlink}type"
xsiNil = "{http://www.w3.org/2001/XMLSchema-instance}nil"

qnXsdElement = "{http://www.w3.org/2001/XMLSchema}element"
qnXsdRestriction = "{http://www.w3.org/2001/XMLSchema}restriction"
qnXsdEnumeration = "{http://www.w3.org/2001/XMLSchema}enumeration"
qnLinkLoc = "{http://www.xbrl.org/2003/linkbase}loc"
qnLinkLabel = "{http://www.xbrl.org/2003/linkbase}label"
qnLinkLabelArc = "{http://www.xbrl.org/2003/linkbase}labelArc"
qnLinkDefinitionArc = "{http://www.xbrl.org/2003/linkbase}definitionArc"

standardLabel = "http://www.xbrl.org/2003/role/label"
verboseLabel = "http://www.xbrl.org/2003/role/verboseLabel"

dimensionDomain = "http://xbrl.org/int/dim/arcrole/dimension-domain"
domainMember = "http://xbrl.org/int/dim/arcrole/domain-member"
hypercubeDimension = "http://xbrl.org/int/dim/arcrole/hypercube-dimension"

# fixed prefixes of the instance document, the taxonomy prefix is configurable
instanceNsmap = {
    "xbrli": xbrli,
    "link": link,
    "xlink": xlink,
    "xbrldi": xbrldi,
    "iso4217": iso4217,
    "xsi": xsi,
}

pureUnitId = "pure"
defaultDimensionName = "CountryDimension"
defaultMemberPrefix = "sdl"

# schema item types, as written in the type attribute of element declarations
integerItemTypes = {"xbrli:integerItemType", "xbrli:nonNegativeIntegerItemType", "xbrli:positiveIntegerItemType"}
monetaryItemTypes = {"xbrli:monetaryItemType"}
decimalItemTypes = {"xbrli:decimalItemType"}
percentageItemTypes = {"xbrli:pureItemType", "num:percentItemType"}
dateItemTypes = {"xbrli:dateItemType"}
booleanItemTypes = {"xbrli:booleanItemType"}
stringItemType = "xbrli:stringItemType"

# two valued enumerations treated as yes/no, lower case and sorted
booleanEnumerations = (
    ("non", "oui"),
    ("no", "yes"),
)
affirmativeTokens = ("yes", "oui")
negativeTokens = ("no", "non")

# literal the gate rules compare against, translated to the schema enumeration at load
gateSentinel = "Yes"
