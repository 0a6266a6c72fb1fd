"""First-run demo data: one account per role, and a handful of clients."""

DEMO_PASSWORD = "password123"

DEFAULT_USERS: list[dict] = [
    {
        "id": "1",
        "name": "Muhammad Zayan",
        "email": "admin@igilife.com",
        "role": "admin",
        "department": "Administration",
        "agentId": "ADM001",
        "password": DEMO_PASSWORD,
    },
    {
        "id": "2",
        "name": "Sarah Ahmed",
        "email": "agent@igilife.com",
        "role": "agent",
        "department": "Sales",
        "agentId": "AGT001",
        "password": DEMO_PASSWORD,
    },
    {
        "id": "3",
        "name": "Ahmed Ali",
        "email": "client@igilife.com",
        "role": "user",
        "department": "Client",
        "password": DEMO_PASSWORD,
    },
]

DEFAULT_CLIENTS: list[dict] = [
    {
        "id": "1",
        "name": "Ahmed Khan",
        "nationalId": "42101-1234567-8",
        "contact": "+92-300-1234567",
        "email": "ahmed.khan@example.com",
        "address": "House 123, Street 45, F-8, Islamabad",
        "agentId": "AGT001",
        "createdAt": "2024-01-15",
    },
    {
        "id": "2",
        "name": "Fatima Ali",
        "nationalId": "42201-2345678-9",
        "contact": "+92-321-2345678",
        "email": "fatima.ali@example.com",
        "address": "Apartment 56, Block B, DHA, Karachi",
        "agentId": "AGT002",
        "createdAt": "2024-01-20",
    },
    {
        "id": "3",
        "name": "Muhammad Hassan",
        "nationalId": "42301-3456789-0",
        "contact": "+92-333-3456789",
        "email": "hassan@example.com",
        "address": "House 789, Model Town, Lahore",
        "agentId": "AGT001",
        "createdAt": "2024-02-01",
    },
    {
        "id": "4",
        "name": "Ayesha Malik",
        "nationalId": "42401-4567890-1",
        "contact": "+92-345-4567890",
        "email": "ayesha.malik@example.com",
        "address": "Villa 321, Gulshan-e-Iqbal, Karachi",
        "agentId": "AGT003",
        "createdAt": "2024-02-10",
    },
]
