"""
The Shipper's Letter of Instruction grid: 18 sections, 48 numbered boxes.

Heights are in points and sized for the Letter live area; everything but the
product data rows is static, which leaves room for eight commodity rows on
Letter and twelve on A4.
"""

from .model import (
    NO_BORDERS,
    Check,
    Field,
    FormCell,
    FormLayout,
    FormRow,
    FormSection,
    ProductColumn,
    ProductTable,
    Text,
)

TITLE = "SHIPPER'S LETTER OF INSTRUCTION (SLI)"

CERTIFICATION = (
    "I certify that the statements made and all information contained herein are true "
    "and correct. I understand that civil and criminal penalties, including forfeiture "
    "and sale, may be imposed for making false or fraudulent statements herein, failing "
    "to provide the requested information or for violation of U.S. laws on exportation "
    "(13 U.S.C. Sec. 305; 22 U.S.C. Sec. 401; 18 U.S.C. Sec. 1001; 50 U.S.C. App. 2410)."
)


def _lines(name: str, count: int) -> tuple[Field, ...]:
    return tuple(Field(name, index) for index in range(count))


def _checks(*keys: str) -> tuple[Check, ...]:
    return tuple(Check(key) for key in keys)


TITLE_SECTION = FormSection("title", (
    FormRow(28, (
        FormCell(64, content=(Text(TITLE, bold=True, size=12),), align="center"),
        FormCell(18, label="SLI Date", content=(Field("sli_date"),)),
        FormCell(18, label="SLI No.", content=(Field("sli_number"),)),
    )),
))

# Boxes 1-4 stack in a nested column; box 5 spans both of its rows
PARTIES = FormSection("parties", (
    FormRow(84, (
        FormCell(60, borders=NO_BORDERS, rows=(
            FormRow(30, (
                FormCell(50, box=1, label="USPPI Name", content=(Field("usppi_name"),)),
                FormCell(50, box=3, label="Freight Location Co Name",
                         content=(Field("freight_location_name"),)),
            )),
            FormRow(54, (
                FormCell(50, box=2, label="USPPI Address",
                         content=_lines("usppi_address_lines", 3)),
                FormCell(50, box=4, label="Freight Location Address",
                         content=_lines("freight_location_address_lines", 3)),
            )),
        )),
        FormCell(40, box=5, label="Forwarding Agent",
                 content=_lines("forwarding_agent_lines", 4)),
    )),
))

EXPORT_REFERENCES = FormSection("export_references", (
    FormRow(30, (
        FormCell(25, box=6, label="Date of Export", content=(Field("export_date"),)),
        FormCell(25, box=7, label="USPPI EIN (IRS) No.", content=(Field("usppi_ein"),)),
        FormCell(25, box=8, label="Parties to Transaction",
                 content=_checks("related_party_related", "related_party_non_related")),
        FormCell(25, box=9, label="USPPI Reference No.", content=(Field("reference_number"),)),
    )),
))

ROUTING = FormSection("routing", (
    FormRow(30, (
        FormCell(25, box=10, label="Routed Export Transaction",
                 content=_checks("routed_export_yes", "routed_export_no")),
        FormCell(50, box=13, label="Intermediate Consignee",
                 content=(Field("intermediate_consignee"),)),
        FormCell(25, box=14, label="Point (State) of Origin",
                 content=(Field("state_of_origin"),)),
    )),
))

CONSIGNEE = FormSection("consignee", (
    FormRow(64, (
        FormCell(60, box=11, label="Ultimate Consignee Name & Address", content=(
            Field("consignee_name"),
            *_lines("consignee_address_lines", 3),
            Field("consignee_country"),
        )),
        FormCell(40, box=12, label="Ultimate Consignee Type", content=_checks(
            "consignee_type_government",
            "consignee_type_direct_consumer",
            "consignee_type_other_unknown",
            "consignee_type_reseller",
        )),
    )),
))

DESTINATION = FormSection("destination", (
    FormRow(30, (
        FormCell(30, box=15, label="Country of Ultimate Destination",
                 content=(Field("consignee_country"),)),
        FormCell(20, box=16, label="Hazardous Material",
                 content=_checks("hazardous_material_yes", "hazardous_material_no")),
        FormCell(20, box=17, label="In-Bond Code", content=(Field("in_bond_code"),)),
        FormCell(15, box=18, label="Entry Number"),
        FormCell(15, box=19, label="FTZ Number"),
    )),
))

CARRIAGE = FormSection("carriage", (
    FormRow(30, (
        FormCell(25, box=20, label="Mode of Transport", content=(Field("mode_of_transport"),)),
        FormCell(20, box=21, label="TIB / Carnet",
                 content=_checks("tib_carnet_yes", "tib_carnet_no")),
        FormCell(20, box=22, label="Insurance Amount"),
        FormCell(35, box=23, label="Declared Value for Carriage"),
    )),
))

DELIVERY = FormSection("delivery", (
    FormRow(30, (
        FormCell(40, box=24, label="Deliver To", content=_checks("deliver_to_checkbox")),
        FormCell(60, box=25, label="Incoterms / Freight Terms"),
    )),
))

INSTRUCTIONS = FormSection("instructions", (
    FormRow(48, (
        FormCell(100, box=26, label="Instructions to Forwarder",
                 content=(Field("instructions_to_forwarder", wrap=True),)),
    )),
))

PRODUCTS = ProductTable(
    "products",
    columns=(
        ProductColumn("origin_flag", 27, "D/F", 5, align="center"),
        ProductColumn("hs_code", 28, "Schedule B / HTS Number", 15),
        ProductColumn("quantity", 29, "Quantity", 9, align="right"),
        ProductColumn("uom", 30, "UOM", 7),
        ProductColumn("weight", 31, "Shipping Weight", 12, align="right"),
        ProductColumn("eccn", 32, "ECCN", 8),
        ProductColumn("sme", 33, "SME", 5, align="center"),
        ProductColumn("license_symbol", 34, "License Symbol", 11),
        ProductColumn("value", 35, "Value (USD)", 14, align="right"),
        ProductColumn("license_value", 36, "License Value", 14, align="right"),
    ),
    header_height=22,
    row_height=14,
    total_span=8,
)

LICENSING = FormSection("licensing", (
    FormRow(28, (
        FormCell(35, box=37, label="License Number", content=(Field("license_number"),)),
        FormCell(30, box=38, label="DDTC Registration No."),
        FormCell(35, box=39, label="Eligible Party Certification"),
    )),
))

AUTHORIZATION = FormSection("authorization", (
    FormRow(34, (
        FormCell(100, box=40, label="Designation of Forwarding Agent",
                 content=_checks("declaration_statement_checkbox")),
    )),
))

OFFICER = FormSection("officer", (
    FormRow(28, (
        FormCell(50, box=41, label="Authorized Officer or Employee",
                 content=(Field("officer_name"),)),
        FormCell(50, box=42, label="USPPI Email Address", content=(Field("usppi_email"),)),
    )),
))

CONTACT = FormSection("contact", (
    FormRow(28, (
        FormCell(30, box=43, label="Telephone No.", content=(Field("usppi_phone"),)),
        FormCell(40, box=44, label="Printed Name", content=(Field("officer_name"),)),
        FormCell(30, box=45, label="Signature"),
    )),
))

SIGNATURE = FormSection("signature", (
    FormRow(28, (
        FormCell(40, box=46, label="Title", content=(Field("officer_title"),)),
        FormCell(30, box=47, label="Date", content=(Field("sli_date"),)),
        FormCell(30, box=48, label="Electronic Signature",
                 content=_checks("signature_checkbox")),
    )),
))

CERTIFICATION_SECTION = FormSection("certification", (
    FormRow(30, (
        FormCell(100, content=(Text(CERTIFICATION, size=6, wrap=True),)),
    )),
))

FOOTER = FormSection("footer", (
    FormRow(14, (
        FormCell(50, borders=NO_BORDERS, content=(Text("Shipper's Letter of Instruction", size=6),)),
        FormCell(50, borders=NO_BORDERS, align="right", content=(Field("reference_number"),)),
    )),
))

SLI_LAYOUT = FormLayout(
    title=TITLE,
    sections=(
        TITLE_SECTION,
        PARTIES,
        EXPORT_REFERENCES,
        ROUTING,
        CONSIGNEE,
        DESTINATION,
        CARRIAGE,
        DELIVERY,
        INSTRUCTIONS,
        PRODUCTS,
        LICENSING,
        AUTHORIZATION,
        OFFICER,
        CONTACT,
        SIGNATURE,
        CERTIFICATION_SECTION,
        FOOTER,
    ),
)
