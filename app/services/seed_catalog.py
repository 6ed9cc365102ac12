# app/services/seed_catalog.py
"""
Fixed demo content for an aesthetics clinic.

Plain data only; dataset_generator.py decides how it is combined.
"""

from decimal import Decimal

# ----------------------------
# People
# ----------------------------
# Last entry is the front desk: no commission, never assigned to procedures.
STAFF = [
    {"name": "Dr. Marina Santos", "role": "Dermatologist", "color": "#8B5CF6", "commission_rate": Decimal("40"), "phone": "(11) 99876-5432"},
    {"name": "Dr. Ricardo Almeida", "role": "Plastic Surgeon", "color": "#10B981", "commission_rate": Decimal("45"), "phone": "(11) 99765-4321"},
    {"name": "Amanda Costa", "role": "Aesthetician", "color": "#F59E0B", "commission_rate": Decimal("25"), "phone": "(11) 99654-3210"},
    {"name": "Juliana Ferreira", "role": "Biomedical Scientist", "color": "#EC4899", "commission_rate": Decimal("30"), "phone": "(11) 99543-2109"},
    {"name": "Carla Souza", "role": "Receptionist", "color": "#06B6D4", "commission_rate": Decimal("0"), "phone": "(11) 99432-1098"},
]

PATIENTS = [
    {"name": "Fernanda Oliveira", "phone": "(11) 98765-4321", "email": "fernanda@email.com", "profession": "Lawyer", "birth_date": "1985-03-15", "marketing_source": "Instagram"},
    {"name": "Camila Rodrigues", "phone": "(11) 97654-3210", "email": "camila@email.com", "profession": "Physician", "birth_date": "1990-07-22", "marketing_source": "Referral"},
    {"name": "Patricia Lima", "phone": "(11) 96543-2109", "email": "patricia@email.com", "profession": "Entrepreneur", "birth_date": "1982-11-08", "marketing_source": "Google"},
    {"name": "Ana Carolina Mendes", "phone": "(11) 95432-1098", "email": "anacarolina@email.com", "profession": "Architect", "birth_date": "1988-05-30", "marketing_source": "Instagram"},
    {"name": "Beatriz Santos", "phone": "(11) 94321-0987", "email": "beatriz@email.com", "profession": "Designer", "birth_date": "1995-09-12", "marketing_source": "TikTok"},
    {"name": "Larissa Costa", "phone": "(11) 93210-9876", "email": "larissa@email.com", "profession": "Dentist", "birth_date": "1987-01-25", "marketing_source": "Referral"},
    {"name": "Mariana Alves", "phone": "(11) 92109-8765", "email": "mariana@email.com", "profession": "Psychologist", "birth_date": "1992-04-18", "marketing_source": "Facebook"},
    {"name": "Gabriela Nunes", "phone": "(11) 91098-7654", "email": "gabriela@email.com", "profession": "Journalist", "birth_date": "1989-08-07", "marketing_source": "Instagram"},
    {"name": "Renata Pereira", "phone": "(11) 90987-6543", "email": "renata@email.com", "profession": "Accountant", "birth_date": "1983-12-03", "marketing_source": "Google"},
    {"name": "Isabela Martins", "phone": "(11) 89876-5432", "email": "isabela@email.com", "profession": "Engineer", "birth_date": "1991-06-20", "marketing_source": "Referral"},
    {"name": "Carolina Fernandes", "phone": "(11) 88765-4321", "email": "carolina@email.com", "profession": "Nutritionist", "birth_date": "1986-02-14", "marketing_source": "Instagram"},
    {"name": "Juliana Ribeiro", "phone": "(11) 87654-3210", "email": "juliana.r@email.com", "profession": "Physiotherapist", "birth_date": "1993-10-28", "marketing_source": "TikTok"},
]

# ----------------------------
# Agenda
# ----------------------------
PROCEDURES = [
    {"name": "Botox 3 Areas", "duration": 30},
    {"name": "Lip Filler", "duration": 45},
    {"name": "Collagen Biostimulator", "duration": 60},
    {"name": "Facial Cleansing", "duration": 60},
    {"name": "Chemical Peel", "duration": 45},
    {"name": "Facial Harmonization", "duration": 90},
    {"name": "Sculptra", "duration": 60},
    {"name": "Skinbooster", "duration": 30},
    {"name": "PDO Threads", "duration": 60},
    {"name": "Microneedling", "duration": 45},
]

APPOINTMENT_NOTE = "Patient allergic to lidocaine"

OPENING_HOUR = 8
CLOSING_HOUR = 18

# ----------------------------
# Finance
# ----------------------------
REVENUE_CATALOG = [
    {"description": "Full Face Botox", "amount": Decimal("2400.00"), "category": "Procedures", "payment_method": "credit"},
    {"description": "Lip Filler", "amount": Decimal("1800.00"), "category": "Procedures", "payment_method": "pix"},
    {"description": "Glute Max Protocol", "amount": Decimal("3500.00"), "category": "Procedures", "payment_method": "credit"},
    {"description": "Sculptra Biostimulator", "amount": Decimal("4200.00"), "category": "Procedures", "payment_method": "credit"},
    {"description": "Facial Harmonization", "amount": Decimal("5800.00"), "category": "Procedures", "payment_method": "pix"},
    {"description": "Skinbooster", "amount": Decimal("1200.00"), "category": "Procedures", "payment_method": "debit"},
    {"description": "PDO Threads", "amount": Decimal("2800.00"), "category": "Procedures", "payment_method": "credit"},
    {"description": "Chemical Peel", "amount": Decimal("450.00"), "category": "Procedures", "payment_method": "pix"},
    {"description": "Premium Facial Cleansing", "amount": Decimal("280.00"), "category": "Procedures", "payment_method": "debit"},
    {"description": "Microneedling", "amount": Decimal("650.00"), "category": "Procedures", "payment_method": "pix"},
    {"description": "Assessment Consultation", "amount": Decimal("350.00"), "category": "Consultations", "payment_method": "pix"},
    {"description": "Post-Procedure Follow-up", "amount": Decimal("0.00"), "category": "Consultations", "payment_method": "pix"},
    {"description": "Sunscreen Sale", "amount": Decimal("180.00"), "category": "Products", "payment_method": "credit"},
    {"description": "Home Care Kit", "amount": Decimal("450.00"), "category": "Products", "payment_method": "credit"},
]

EXPENSE_CATALOG = [
    {"description": "Botulinum Toxin Purchase", "amount": Decimal("4500.00"), "category": "Supplies"},
    {"description": "Hyaluronic Acid (Box)", "amount": Decimal("3200.00"), "category": "Supplies"},
    {"description": "Sculptra 2 Vials", "amount": Decimal("2800.00"), "category": "Supplies"},
    {"description": "Disposable Material", "amount": Decimal("850.00"), "category": "Supplies"},
    {"description": "PDO Threads (Kit)", "amount": Decimal("1200.00"), "category": "Supplies"},
    {"description": "Topical Anesthetics", "amount": Decimal("320.00"), "category": "Supplies"},
    {"description": "Unit Rent", "amount": Decimal("5500.00"), "category": "Rent"},
    {"description": "Building Fees", "amount": Decimal("850.00"), "category": "Rent"},
    {"description": "Property Tax (Installment)", "amount": Decimal("420.00"), "category": "Rent"},
    {"description": "Google Ads", "amount": Decimal("2500.00"), "category": "Marketing"},
    {"description": "Instagram Ads", "amount": Decimal("1800.00"), "category": "Marketing"},
    {"description": "Influencer Partnership", "amount": Decimal("3000.00"), "category": "Marketing"},
    {"description": "Content Production", "amount": Decimal("1500.00"), "category": "Marketing"},
    {"description": "Electricity", "amount": Decimal("680.00"), "category": "Fixed Costs"},
    {"description": "Water and Sewage", "amount": Decimal("180.00"), "category": "Fixed Costs"},
    {"description": "Internet + Phone", "amount": Decimal("320.00"), "category": "Fixed Costs"},
    {"description": "Clinic Insurance", "amount": Decimal("450.00"), "category": "Fixed Costs"},
    {"description": "Accountant", "amount": Decimal("800.00"), "category": "Fixed Costs"},
    {"description": "Management Software", "amount": Decimal("299.00"), "category": "Fixed Costs"},
    {"description": "Receptionist Salary", "amount": Decimal("2800.00"), "category": "Payroll"},
    {"description": "Aesthetician Salary", "amount": Decimal("3500.00"), "category": "Payroll"},
    {"description": "Owner Draw", "amount": Decimal("8000.00"), "category": "Payroll"},
]

QUOTE_TEMPLATES = [
    {
        "items": [
            {"name": "Full Facial Harmonization", "quantity": 1, "price": 5800},
            {"name": "Botox 3 Areas", "quantity": 1, "price": 2400},
        ],
        "total": Decimal("8200"),
    },
    {
        "items": [
            {"name": "Rejuvenation Protocol", "quantity": 3, "price": 1500},
            {"name": "Skinbooster", "quantity": 2, "price": 1200},
        ],
        "total": Decimal("6900"),
    },
    {
        "items": [{"name": "Sculptra Biostimulator", "quantity": 2, "price": 4200}],
        "total": Decimal("8400"),
    },
    {
        "items": [
            {"name": "Lip Filler", "quantity": 1, "price": 1800},
            {"name": "Cheek Filler", "quantity": 1, "price": 2500},
        ],
        "total": Decimal("4300"),
    },
    {
        "items": [
            {"name": "PDO Threads (Package)", "quantity": 1, "price": 4500},
            {"name": "Biostimulator", "quantity": 1, "price": 3200},
        ],
        "total": Decimal("7700"),
    },
]

QUOTE_COUNT = 8
QUOTE_VALID_DAYS = 15

# (month offset range, base revenue, base purchases)
TARGET_MONTH_OFFSETS = range(-3, 3)
TARGET_BASE_PAST = (Decimal("80000"), Decimal("15000"))
TARGET_BASE_FUTURE = (Decimal("85000"), Decimal("18000"))
TARGET_REVENUE_SPREAD = 5000
TARGET_PURCHASES_SPREAD = 1500

CATEGORIES = [
    ("Procedures", "REVENUE"),
    ("Consultations", "REVENUE"),
    ("Products", "REVENUE"),
    ("Packages", "REVENUE"),
    ("Supplies", "EXPENSE_VARIABLE"),
    ("Marketing", "EXPENSE_VARIABLE"),
    ("Commissions", "EXPENSE_VARIABLE"),
    ("Rent", "EXPENSE_FIXED"),
    ("Payroll", "EXPENSE_FIXED"),
    ("Fixed Costs", "EXPENSE_FIXED"),
    ("Taxes", "EXPENSE_FIXED"),
    ("Maintenance", "EXPENSE_VARIABLE"),
]

# ----------------------------
# Inventory
# ----------------------------
# expires_in_days is relative to "now" at generation time.
INVENTORY_PRODUCTS = [
    {"name": "Botox 100U", "description": "Botulinum toxin type A", "category": "Toxins", "unit": "FR", "current_stock": 8, "min_stock": 3, "max_stock": 15, "cost_price": Decimal("850"), "supplier": "Allergan", "batch_number": "BTX2024-001", "expires_in_days": 180},
    {"name": "Dysport 500U", "description": "AbobotulinumtoxinA", "category": "Toxins", "unit": "FR", "current_stock": 5, "min_stock": 2, "max_stock": 10, "cost_price": Decimal("720"), "supplier": "Ipsen Pharma", "batch_number": "DYS2024-045", "expires_in_days": 150},
    {"name": "Xeomin 100U", "description": "IncobotulinumtoxinA", "category": "Toxins", "unit": "FR", "current_stock": 3, "min_stock": 2, "max_stock": 8, "cost_price": Decimal("780"), "supplier": "Merz Aesthetics", "batch_number": "XEO2024-012", "expires_in_days": 200},
    {"name": "Juvederm Ultra XC", "description": "HA filler", "category": "Fillers", "unit": "UN", "current_stock": 12, "min_stock": 5, "max_stock": 25, "cost_price": Decimal("1200"), "supplier": "Allergan", "batch_number": "JUV2024-089", "expires_in_days": 365},
    {"name": "Restylane Lyft", "description": "Volumizing HA filler", "category": "Fillers", "unit": "UN", "current_stock": 8, "min_stock": 3, "max_stock": 15, "cost_price": Decimal("1100"), "supplier": "Galderma", "batch_number": "RST2024-156", "expires_in_days": 300},
    {"name": "Belotero Balance", "description": "HA filler for fine lines", "category": "Fillers", "unit": "UN", "current_stock": 6, "min_stock": 3, "max_stock": 12, "cost_price": Decimal("980"), "supplier": "Merz Aesthetics", "batch_number": "BEL2024-078", "expires_in_days": 280},
    {"name": "Stylage M", "description": "HA filler for medium wrinkles", "category": "Fillers", "unit": "UN", "current_stock": 10, "min_stock": 4, "max_stock": 20, "cost_price": Decimal("650"), "supplier": "Vivacy", "batch_number": "STY2024-234", "expires_in_days": 320},
    {"name": "Sculptra 2 Vials", "description": "PLLA collagen biostimulator", "category": "Biostimulators", "unit": "CX", "current_stock": 4, "min_stock": 2, "max_stock": 8, "cost_price": Decimal("2800"), "supplier": "Galderma", "batch_number": "SCP2024-045", "expires_in_days": 400},
    {"name": "Radiesse 1.5ml", "description": "Calcium hydroxylapatite", "category": "Biostimulators", "unit": "UN", "current_stock": 6, "min_stock": 3, "max_stock": 12, "cost_price": Decimal("1500"), "supplier": "Merz Aesthetics", "batch_number": "RAD2024-067", "expires_in_days": 350},
    {"name": "Ellanse M", "description": "PCL biostimulator", "category": "Biostimulators", "unit": "UN", "current_stock": 3, "min_stock": 2, "max_stock": 6, "cost_price": Decimal("1800"), "supplier": "Sinclair", "batch_number": "ELL2024-023", "expires_in_days": 380},
    {"name": "PDO Mono Threads 29G", "description": "Smooth threads for rejuvenation", "category": "Threads", "unit": "CX", "current_stock": 15, "min_stock": 5, "max_stock": 30, "cost_price": Decimal("180"), "supplier": "Korean Threads", "batch_number": "PDO2024-890", "expires_in_days": 500},
    {"name": "PDO Cog Threads", "description": "Barbed threads for lifting", "category": "Threads", "unit": "PCT", "current_stock": 8, "min_stock": 3, "max_stock": 15, "cost_price": Decimal("450"), "supplier": "Korean Threads", "batch_number": "PDO2024-891", "expires_in_days": 500},
    {"name": "Profhilo H+L", "description": "High concentration HA skinbooster", "category": "Skinboosters", "unit": "UN", "current_stock": 10, "min_stock": 4, "max_stock": 20, "cost_price": Decimal("980"), "supplier": "IBSA", "batch_number": "PRO2024-112", "expires_in_days": 240},
    {"name": "Juvederm Volite", "description": "Hydrating skinbooster", "category": "Skinboosters", "unit": "UN", "current_stock": 7, "min_stock": 3, "max_stock": 15, "cost_price": Decimal("890"), "supplier": "Allergan", "batch_number": "VOL2024-056", "expires_in_days": 260},
    {"name": "Lidocaine 2%", "description": "Local anesthetic", "category": "Anesthetics", "unit": "FR", "current_stock": 20, "min_stock": 10, "max_stock": 40, "cost_price": Decimal("15"), "supplier": "Hipolabor", "batch_number": "LID2024-567", "expires_in_days": 180},
    {"name": "EMLA Cream", "description": "Topical anesthetic", "category": "Anesthetics", "unit": "UN", "current_stock": 12, "min_stock": 5, "max_stock": 25, "cost_price": Decimal("45"), "supplier": "AstraZeneca", "batch_number": "EML2024-234", "expires_in_days": 300},
    {"name": "Needle 30G x 13mm", "description": "Injection needles", "category": "Disposables", "unit": "CX", "current_stock": 25, "min_stock": 10, "max_stock": 50, "cost_price": Decimal("35"), "supplier": "BD Medical", "batch_number": "AGU2024-789", "expires_in_days": 730},
    {"name": "Needle 27G x 40mm", "description": "Cannula needles", "category": "Disposables", "unit": "CX", "current_stock": 18, "min_stock": 8, "max_stock": 35, "cost_price": Decimal("40"), "supplier": "BD Medical", "batch_number": "AGU2024-790", "expires_in_days": 730},
    {"name": "Cannula 25G x 50mm", "description": "Flexible cannulas", "category": "Disposables", "unit": "CX", "current_stock": 12, "min_stock": 5, "max_stock": 25, "cost_price": Decimal("85"), "supplier": "TSK Laboratory", "batch_number": "CAN2024-123", "expires_in_days": 730},
    {"name": "Syringe 1ml Luer Lock", "description": "Disposable syringes", "category": "Disposables", "unit": "CX", "current_stock": 30, "min_stock": 15, "max_stock": 60, "cost_price": Decimal("25"), "supplier": "BD Medical", "batch_number": "SER2024-456", "expires_in_days": 730},
    {"name": "Nitrile Gloves M", "description": "Procedure gloves", "category": "Disposables", "unit": "CX", "current_stock": 8, "min_stock": 4, "max_stock": 20, "cost_price": Decimal("55"), "supplier": "Supermax", "batch_number": "LUV2024-678", "expires_in_days": 365},
    {"name": "Sterile Gauze 7.5x7.5", "description": "Procedure gauze", "category": "Disposables", "unit": "PCT", "current_stock": 40, "min_stock": 20, "max_stock": 80, "cost_price": Decimal("8"), "supplier": "Cremer", "batch_number": "GAZ2024-901", "expires_in_days": 1095},
    {"name": "Glycolic Acid 70%", "description": "Chemical peel", "category": "Peels", "unit": "FR", "current_stock": 4, "min_stock": 2, "max_stock": 8, "cost_price": Decimal("120"), "supplier": "Mesoestetic", "batch_number": "GLI2024-234", "expires_in_days": 365},
    {"name": "Mandelic Acid 40%", "description": "Gentle peel", "category": "Peels", "unit": "FR", "current_stock": 3, "min_stock": 2, "max_stock": 6, "cost_price": Decimal("95"), "supplier": "Mesoestetic", "batch_number": "MAN2024-567", "expires_in_days": 365},
    {"name": "TCA 35%", "description": "Medium depth peel", "category": "Peels", "unit": "FR", "current_stock": 2, "min_stock": 1, "max_stock": 4, "cost_price": Decimal("180"), "supplier": "Mesoestetic", "batch_number": "TCA2024-890", "expires_in_days": 300},
    {"name": "Hyaluronidase", "description": "Filler dissolving enzyme", "category": "Enzymes", "unit": "FR", "current_stock": 4, "min_stock": 2, "max_stock": 8, "cost_price": Decimal("320"), "supplier": "Pharmaceutical", "batch_number": "HYA2024-444", "expires_in_days": 210},
    # low stock
    {"name": "Injectable Vitamin C", "description": "Vitamin C ampoules", "category": "Vitamins", "unit": "AMP", "current_stock": 2, "min_stock": 5, "max_stock": 20, "cost_price": Decimal("25"), "supplier": "Pharmaceutical", "batch_number": "VTC2024-111", "expires_in_days": 90},
    {"name": "Tranexamic Acid", "description": "Injectable lightener", "category": "Lighteners", "unit": "AMP", "current_stock": 1, "min_stock": 3, "max_stock": 10, "cost_price": Decimal("35"), "supplier": "Pharmaceutical", "batch_number": "ATX2024-222", "expires_in_days": 60},
    # expiring soon
    {"name": "Lipolytic Enzymes", "description": "Enzymatic lipolysis", "category": "Lipolytics", "unit": "FR", "current_stock": 5, "min_stock": 2, "max_stock": 10, "cost_price": Decimal("280"), "supplier": "Pharmaceutical", "batch_number": "ENZ2024-333", "expires_in_days": 15},
    # expired
    {"name": "Injectable DMAE", "description": "Facial tensor - EXPIRED", "category": "Firming", "unit": "AMP", "current_stock": 3, "min_stock": 2, "max_stock": 8, "cost_price": Decimal("45"), "supplier": "Pharmaceutical", "batch_number": "DMA2023-999", "expires_in_days": -10},
]

EXPIRY_ALERT_WINDOW_DAYS = 30

# procedure name -> [(product name, quantity per use, required)]
PROCEDURE_PRODUCTS = {
    "Botox 3 Areas": [
        ("Botox 100U", Decimal("0.5"), True),
        ("Needle 30G x 13mm", Decimal("3"), True),
        ("Syringe 1ml Luer Lock", Decimal("1"), True),
        ("Sterile Gauze 7.5x7.5", Decimal("2"), True),
    ],
    "Lip Filler": [
        ("Juvederm Ultra XC", Decimal("1"), True),
        ("Cannula 25G x 50mm", Decimal("1"), True),
        ("EMLA Cream", Decimal("0.5"), False),
        ("Sterile Gauze 7.5x7.5", Decimal("3"), True),
    ],
    "Facial Harmonization": [
        ("Juvederm Ultra XC", Decimal("2"), True),
        ("Restylane Lyft", Decimal("1"), True),
        ("Cannula 25G x 50mm", Decimal("3"), True),
        ("Lidocaine 2%", Decimal("1"), True),
        ("Sterile Gauze 7.5x7.5", Decimal("5"), True),
    ],
    "Sculptra": [
        ("Sculptra 2 Vials", Decimal("1"), True),
        ("Needle 27G x 40mm", Decimal("2"), True),
        ("Syringe 1ml Luer Lock", Decimal("2"), True),
        ("Sterile Gauze 7.5x7.5", Decimal("4"), True),
    ],
    "Collagen Biostimulator": [
        ("Radiesse 1.5ml", Decimal("1"), True),
        ("Cannula 25G x 50mm", Decimal("2"), True),
        ("Lidocaine 2%", Decimal("0.5"), True),
        ("Sterile Gauze 7.5x7.5", Decimal("3"), True),
    ],
    "Skinbooster": [
        ("Profhilo H+L", Decimal("1"), True),
        ("Needle 30G x 13mm", Decimal("5"), True),
        ("Sterile Gauze 7.5x7.5", Decimal("2"), True),
    ],
    "PDO Threads": [
        ("PDO Mono Threads 29G", Decimal("10"), True),
        ("PDO Cog Threads", Decimal("4"), False),
        ("Lidocaine 2%", Decimal("2"), True),
        ("Sterile Gauze 7.5x7.5", Decimal("5"), True),
    ],
    "Chemical Peel": [
        ("Glycolic Acid 70%", Decimal("0.1"), True),
        ("Sterile Gauze 7.5x7.5", Decimal("5"), True),
        ("Nitrile Gloves M", Decimal("1"), True),
    ],
    "Microneedling": [
        ("Injectable Vitamin C", Decimal("1"), False),
        ("EMLA Cream", Decimal("1"), True),
        ("Sterile Gauze 7.5x7.5", Decimal("3"), True),
    ],
}

OPTIONAL_PRODUCT_NOTE = "Optional - at the professional's discretion"

# ----------------------------
# CRM chat
# ----------------------------
LEADS = [
    {"name": "Maria Silva", "phone": "5511987654321", "last_message": "Hi! I'd like to know more about facial harmonization"},
    {"name": "Ana Paula Santos", "phone": "5511976543210", "last_message": "How much is botox? Do you offer installments?"},
    {"name": "Carla Mendes", "phone": "5511965432109", "last_message": "Can I book an assessment this week?"},
    {"name": "Juliana Costa", "phone": "5511954321098", "last_message": "Thanks for the help! I'll think about it and get back to you"},
    {"name": "Roberta Lima", "phone": "5511943210987", "last_message": "Perfect, confirmed for Friday at 2pm"},
    {"name": "Daniela Ferreira", "phone": "5511932109876", "last_message": "What treatments do you have for dark circles?"},
    {"name": "Paula Rodrigues", "phone": "5511921098765", "last_message": "Saw you on Instagram and I'm interested in sculptra"},
    {"name": "Luciana Alves", "phone": "5511910987654", "last_message": "Do you do lip flips?"},
]

# {first_name} is filled with the lead's first name.
CONVERSATION_SCRIPT = [
    ("INBOUND", "Hi! I saw you on Instagram and would like to know more about your treatments"),
    ("OUTBOUND", "Hello {first_name}! Happy to hear from you. What would you like to know?"),
    ("INBOUND", "I want to know about facial harmonization. Roughly how much does it cost?"),
    ("OUTBOUND", "Harmonization is tailored to each patient. Protocols start at R$ 3,500. Shall we book a free assessment?"),
    ("INBOUND", "Do you take card installments?"),
    ("OUTBOUND", "Yes! Up to 12 installments on card, and special conditions for upfront payment. When would suit you?"),
    ("INBOUND", "Could it be this week?"),
    ("OUTBOUND", "Sure! We have Thursday at 3pm or Friday at 10am. Which works best?"),
]

# ----------------------------
# Prescriptions
# ----------------------------
PRESCRIPTION_TEMPLATES = [
    {
        "items": [
            {"name": "Sunscreen SPF 50+", "dosage": "Apply every morning", "quantity": 1, "instructions": "Reapply every 3 hours"},
            {"name": "Facial Moisturizer", "dosage": "Apply twice a day", "quantity": 1, "instructions": "Morning and night"},
            {"name": "Vitamin C Serum", "dosage": "Apply in the morning", "quantity": 1, "instructions": "Before sunscreen"},
        ],
        "diagnosis": "Post-procedure: Facial Harmonization",
    },
    {
        "items": [
            {"name": "Topical Hyaluronic Acid", "dosage": "Apply at night", "quantity": 1, "instructions": "Before moisturizer"},
            {"name": "Gentle Facial Cleanser", "dosage": "Use twice a day", "quantity": 1, "instructions": "Cleanse gently"},
        ],
        "diagnosis": "Post-procedure: Lip Filler",
    },
    {
        "items": [
            {"name": "Retinoid 0.025%", "dosage": "Apply at night, 3x a week", "quantity": 1, "instructions": "Start gradually, alternate days"},
            {"name": "Facial Moisturizer", "dosage": "Apply daily", "quantity": 1, "instructions": "Always after retinoid"},
            {"name": "Sunscreen SPF 60+", "dosage": "Apply daily", "quantity": 1, "instructions": "Mandatory while using retinoid"},
        ],
        "diagnosis": "Anti-aging and melasma treatment",
    },
    {
        "items": [
            {"name": "Topical Tranexamic Acid", "dosage": "Apply twice a day", "quantity": 1, "instructions": "Morning and night"},
            {"name": "Vitamin C Serum", "dosage": "Apply in the morning", "quantity": 1, "instructions": "Before sunscreen"},
            {"name": "Sunscreen SPF 50+", "dosage": "Apply daily", "quantity": 1, "instructions": "Reapply during the day"},
        ],
        "diagnosis": "Melasma and hyperpigmentation",
    },
    {
        "items": [
            {"name": "Healing Cream", "dosage": "Apply 3x a day", "quantity": 1, "instructions": "Keep the area hydrated"},
            {"name": "Sunscreen SPF 50+", "dosage": "Apply daily", "quantity": 1, "instructions": "Avoid sun exposure"},
        ],
        "diagnosis": "Post-procedure: Microneedling",
    },
]

PRESCRIPTION_COUNT = 10
PRESCRIPTION_VALID_DAYS = 90
PRESCRIPTION_NOTE = "Patient instructed on post-procedure care. Follow-up in 15 days."

# ----------------------------
# Loyalty
# ----------------------------
LOYALTY_REWARDS = [
    {"name": "10% Discount", "description": "10% coupon on any procedure", "points_cost": 500, "type": "DISCOUNT", "value": Decimal("10"), "tier": None, "stock": None, "valid_days": 30, "category": "BEAUTY"},
    {"name": "Skincare Kit", "description": "Complete skincare kit", "points_cost": 1500, "type": "PRODUCT", "value": Decimal("150"), "tier": None, "stock": 20, "valid_days": 60, "category": "BEAUTY"},
    {"name": "Facial Cleansing", "description": "One full facial cleansing session", "points_cost": 2500, "type": "PROCEDURE", "value": Decimal("250"), "tier": "SILVER", "stock": None, "valid_days": 90, "category": "BEAUTY"},
    {"name": "R$100 Voucher", "description": "R$100 voucher for any service", "points_cost": 3000, "type": "VOUCHER", "value": Decimal("100"), "tier": "SILVER", "stock": None, "valid_days": 60, "category": "SPECIAL"},
    {"name": "25% Discount", "description": "25% coupon on aesthetic procedures", "points_cost": 4000, "type": "DISCOUNT", "value": Decimal("25"), "tier": "GOLD", "stock": None, "valid_days": 45, "category": "BEAUTY"},
    {"name": "Full Botox", "description": "Full botulinum toxin application", "points_cost": 8000, "type": "PROCEDURE", "value": Decimal("1500"), "tier": "GOLD", "stock": None, "valid_days": 120, "category": "BEAUTY"},
    {"name": "VIP Day Spa", "description": "Full spa day with every treatment", "points_cost": 12000, "type": "PROCEDURE", "value": Decimal("2000"), "tier": "DIAMOND", "stock": None, "valid_days": 180, "category": "WELLNESS"},
    {"name": "R$500 Voucher", "description": "Premium R$500 voucher", "points_cost": 15000, "type": "VOUCHER", "value": Decimal("500"), "tier": "DIAMOND", "stock": None, "valid_days": 90, "category": "SPECIAL"},
]

POINTS_PER_CONSULTATION = 100
POINTS_PER_PROCEDURE = 150
POINTS_PER_REFERRAL = 500
POINTS_PER_BONUS = 50

# (minimum total points, tier), highest first
TIER_THRESHOLDS = [
    (15000, "DIAMOND"),
    (5000, "GOLD"),
    (1000, "SILVER"),
    (0, "BRONZE"),
]

LOYALTY_PROCEDURE_NAMES = ["Botox", "Filler", "Facial Cleansing", "Peel", "Harmonization"]

REFERRED_FRIENDS = [
    "Aline Barros",
    "Bruna Teixeira",
    "Cintia Moraes",
    "Debora Rocha",
    "Elaine Prado",
    "Flavia Duarte",
    "Helena Castro",
    "Ingrid Lopes",
]

REDEEMING_MEMBERS = 5
