"""Seed records for local runs of the in-memory data source.

Keys use the camelCase shape delivered by the hosted store; the models
accept either form.
"""

CUSTOMERS = [
    {
        "id": "c1",
        "name": "Acme Corp",
        "industry": "SaaS",
        "size": "medium",
        "status": "active",
        "tier": "pro",
        "joinDate": "2024-01-15",
        "lastActivity": "2025-09-12",
        "createdAt": "2024-01-15T09:00:00Z",
        "contactPerson": "John Smith",
        "email": "john.smith@acmecorp.com",
        "phone": "+1 (555) 123-4567",
        "website": "https://acmecorp.com",
        "location": {"city": "San Francisco", "state": "CA", "country": "USA"},
        "revenue": 48000,
        "healthScore": 72,
        "tags": ["high-value", "product-roadmap", "integration"],
    },
    {
        "id": "c2",
        "name": "Globex Inc",
        "industry": "Finance",
        "size": "enterprise",
        "status": "active",
        "tier": "enterprise",
        "joinDate": "2023-08-22",
        "lastActivity": "2025-09-03",
        "createdAt": "2023-08-22T09:00:00Z",
        "contactPerson": "Lisa Wong",
        "email": "lisa.wong@globex.com",
        "phone": "+1 (555) 987-6543",
        "website": "https://globex.com",
        "location": {"city": "New York", "state": "NY", "country": "USA"},
        "revenue": 120000,
        "healthScore": 91,
        "tags": ["enterprise", "compliance", "security"],
    },
    {
        "id": "c3",
        "name": "TechStart Solutions",
        "industry": "Technology",
        "size": "startup",
        "status": "prospect",
        "tier": "free",
        "joinDate": "2025-09-01",
        "lastActivity": "2025-09-15",
        "createdAt": "2025-09-01T09:00:00Z",
        "contactPerson": "Alex Rivera",
        "email": "alex@techstart.io",
        "website": "https://techstart.io",
        "location": "Austin, TX",
        "healthScore": 85,
        "tags": ["new-customer", "demo", "high-potential"],
    },
    {
        "id": "c4",
        "name": "Healthcare Plus",
        "industry": "Healthcare",
        "size": "medium",
        "status": "active",
        "tier": "basic",
        "joinDate": "2024-06-10",
        "lastActivity": "2025-09-07",
        "createdAt": "2024-06-10T09:00:00Z",
        "contactPerson": "Dr. Maria Garcia",
        "email": "maria.garcia@healthcareplus.com",
        "phone": "+1 (555) 456-7890",
        "website": "https://healthcareplus.com",
        "location": {"city": "Chicago", "state": "IL", "country": "USA"},
        "revenue": 24000,
        "healthScore": 45,
        "tags": ["support", "technical-issues", "api"],
    },
    {
        "id": "c5",
        "name": "RetailMax",
        "industry": "Retail",
        "size": "large",
        "status": "active",
        "tier": "pro",
        "joinDate": "2023-11-05",
        "lastActivity": "2025-09-10",
        "createdAt": "2023-11-05T09:00:00Z",
        "contactPerson": "Robert Kim",
        "email": "robert.kim@retailmax.com",
        "phone": "+1 (555) 321-0987",
        "website": "https://retailmax.com",
        "location": {"city": "Seattle", "state": "WA", "country": "USA"},
        "revenue": 72000,
        "healthScore": 68,
        "tags": ["renewal", "expansion", "roi"],
    },
    {
        "id": "c6",
        "name": "EduTech Academy",
        "industry": "Education",
        "size": "small",
        "status": "active",
        "tier": "basic",
        "joinDate": "2024-03-20",
        "lastActivity": "2025-08-28",
        "createdAt": "2024-03-20T09:00:00Z",
        "contactPerson": "Sarah Johnson",
        "email": "sarah@edutech.edu",
        "location": "Boston, MA",
        "revenue": 18000,
        "healthScore": 64,
        "tags": ["education", "non-profit", "growth"],
    },
    {
        "id": "c7",
        "name": "Manufacturing Pro",
        "industry": "Manufacturing",
        "size": "enterprise",
        "status": "churned",
        "tier": "enterprise",
        "joinDate": "2023-02-14",
        "lastActivity": "2025-07-15",
        "createdAt": "2023-02-14T09:00:00Z",
        "contactPerson": "Mike Thompson",
        "email": "mike@manufacturingpro.com",
        "location": "Detroit, MI",
        "revenue": 0,
        "healthScore": 18,
        "tags": ["churned", "pricing-concerns", "competitor"],
    },
]

CONVERSATIONS = [
    {
        "id": "conv1",
        "customerId": "c1",
        "type": "call",
        "direction": "outbound",
        "date": "2025-09-01T15:00:00Z",
        "createdAt": "2025-09-01T16:00:00Z",
        "duration": 45,
        "subject": "Q3 Product Roadmap Discussion",
        "summary": "Discussed upcoming features for Q3 release. Customer expressed interest in "
        "AI-powered analytics and raised concerns about current CRM integration speed.",
        "participants": [
            {"name": "John Smith", "role": "Acme"},
            {"name": "Sarah Johnson", "role": "Sales"},
            {"name": "Mike Chen", "role": "Product"},
        ],
        "status": "completed",
        "sentimentScore": 0.6,
        "priority": "high",
        "tags": ["product-roadmap", "ai-features", "integration"],
    },
    {
        "id": "conv2",
        "customerId": "c2",
        "type": "email",
        "direction": "inbound",
        "date": "2025-09-03T10:30:00Z",
        "createdAt": "2025-09-03T10:30:00Z",
        "subject": "Data Privacy and Security Inquiry",
        "summary": "Customer inquired about our data privacy policies and security measures. "
        "Requested detailed documentation on GDPR compliance.",
        "participants": ["Lisa Wong (Globex)", "David Brown (Legal)"],
        "status": "completed",
        "sentimentScore": 0,
        "priority": "medium",
        "tags": ["privacy", "security", "compliance", "gdpr"],
    },
    {
        "id": "conv3",
        "customerId": "c3",
        "type": "call",
        "direction": "outbound",
        "date": "2025-09-05T14:00:00Z",
        "createdAt": "2025-09-05T15:00:00Z",
        "duration": 30,
        "subject": "Initial Discovery Call",
        "summary": "First call with potential customer. Discussed their current tech stack and "
        "pain points with existing solutions. Very interested in our platform.",
        "participants": ["Alex Rivera (TechStart)", "Emma Davis (Sales)"],
        "status": "completed",
        "sentimentScore": 0.7,
        "priority": "high",
        "tags": ["discovery", "new-customer", "tech-stack"],
    },
    {
        "id": "conv4",
        "customerId": "c4",
        "type": "chat",
        "direction": "inbound",
        "date": "2025-09-07T11:15:00Z",
        "createdAt": "2025-09-07T11:45:00Z",
        "subject": "Support Request - Integration Issues",
        "summary": "Customer experiencing issues with API integration. Provided troubleshooting "
        "steps and escalated to technical team.",
        "participants": ["Dr. Maria Garcia (Healthcare Plus)", "Tom Wilson (Support)"],
        "status": "completed",
        "sentimentScore": -0.5,
        "priority": "urgent",
        "tags": ["support", "api", "integration", "technical-issue"],
    },
    {
        "id": "conv5",
        "customerId": "c5",
        "type": "call",
        "direction": "outbound",
        "date": "2025-09-10T16:00:00Z",
        "createdAt": "2025-09-10T17:00:00Z",
        "duration": 60,
        "subject": "Contract Renewal Discussion",
        "summary": "Annual contract renewal meeting. Discussed usage metrics, ROI, and potential "
        "expansion opportunities. Customer satisfied with current service.",
        "participants": [
            "Robert Kim (RetailMax)",
            "Jennifer Lee (Account Management)",
            "Chris Taylor (Sales)",
        ],
        "status": "completed",
        "sentimentScore": 0.8,
        "priority": "medium",
        "tags": ["renewal", "contract", "expansion", "roi"],
    },
    {
        "id": "conv6",
        "customerId": "c1",
        "type": "email",
        "direction": "outbound",
        "date": "2025-09-12T09:00:00Z",
        "createdAt": "2025-09-12T09:00:00Z",
        "subject": "Follow-up on Integration Improvements",
        "summary": "Follow-up email regarding CRM integration performance improvements discussed "
        "in previous call. Shared technical specifications and timeline.",
        "participants": ["John Smith (Acme)", "Mike Chen (Product)", "Anna Rodriguez (Engineering)"],
        "status": "completed",
        "sentimentScore": 0.4,
        "priority": "medium",
        "tags": ["follow-up", "integration", "crm", "technical-specs"],
    },
    {
        "id": "conv7",
        "customerId": "c3",
        "type": "meeting",
        "direction": "outbound",
        "date": "2025-09-15T13:00:00Z",
        "createdAt": "2025-09-08T13:00:00Z",
        "duration": 0,
        "subject": "Product Demo Session",
        "summary": "Scheduled product demonstration for TechStart Solutions team.",
        "participants": ["Alex Rivera (TechStart)", "Emma Davis (Sales)", "Product Team"],
        "status": "scheduled",
        "sentimentScore": 0,
        "priority": "high",
        "tags": ["demo", "scheduled", "product-showcase"],
    },
]

INSIGHTS = [
    {
        "id": "i1",
        "conversationId": "conv1",
        "customerId": "c1",
        "category": "Pain Point",
        "text": "Integration with CRM is too slow.",
        "topics": ["CRM", "Integration"],
        "confidenceScore": 0.92,
        "urgencyScore": 7,
        "createdAt": "2025-09-01T16:05:00Z",
    },
    {
        "id": "i2",
        "conversationId": "conv1",
        "customerId": "c1",
        "category": "Opportunity",
        "text": "Looking for AI-powered reporting.",
        "topics": ["AI", "Reporting"],
        "confidenceScore": 0.85,
        "urgencyScore": 4,
        "potentialRevenue": 12000,
        "createdAt": "2025-09-01T16:06:00Z",
    },
    {
        "id": "i3",
        "conversationId": "conv2",
        "customerId": "c2",
        "category": "Objection",
        "text": "Concerned about data privacy.",
        "topics": ["Privacy", "Security"],
        "confidenceScore": 0.88,
        "urgencyScore": 6,
        "createdAt": "2025-09-03T10:35:00Z",
    },
    {
        "id": "i4",
        "conversationId": "conv2",
        "customerId": "c2",
        "category": "Request",
        "text": "Needs GDPR compliance documentation.",
        "topics": ["GDPR", "Compliance", "Documentation"],
        "confidenceScore": 0.95,
        "urgencyScore": 5,
        "createdAt": "2025-09-03T10:36:00Z",
    },
    {
        "id": "i5",
        "conversationId": "conv3",
        "customerId": "c3",
        "category": "Opportunity",
        "text": "Interested in replacing current analytics platform.",
        "topics": ["Analytics", "Platform Migration"],
        "confidenceScore": 0.8,
        "urgencyScore": 5,
        "potentialRevenue": 30000,
        "createdAt": "2025-09-05T15:05:00Z",
    },
    {
        "id": "i6",
        "conversationId": "conv3",
        "customerId": "c3",
        "category": "Pain Point",
        "text": "Current solution lacks real-time capabilities.",
        "topics": ["Real-time", "Performance"],
        "confidenceScore": 0.77,
        "urgencyScore": 6,
        "createdAt": "2025-09-05T15:06:00Z",
    },
    {
        "id": "i7",
        "conversationId": "conv4",
        "customerId": "c4",
        "category": "Issue",
        "text": "API integration failing with 500 errors.",
        "topics": ["API", "Error", "Integration"],
        "confidenceScore": 0.97,
        "urgencyScore": 9,
        "sentimentScore": -0.6,
        "createdAt": "2025-09-07T11:50:00Z",
    },
    {
        "id": "i8",
        "conversationId": "conv5",
        "customerId": "c5",
        "category": "Success",
        "text": "Achieved 300% ROI in first year.",
        "topics": ["ROI", "Success", "Metrics"],
        "confidenceScore": 0.9,
        "urgencyScore": 2,
        "sentimentScore": 0.8,
        "createdAt": "2025-09-10T17:05:00Z",
    },
    {
        "id": "i9",
        "conversationId": "conv5",
        "customerId": "c5",
        "category": "Opportunity",
        "text": "Interested in expanding to additional departments.",
        "topics": ["Expansion", "Growth"],
        "confidenceScore": 0.83,
        "urgencyScore": 4,
        "potentialRevenue": 36000,
        "createdAt": "2025-09-10T17:06:00Z",
    },
    {
        "id": "i10",
        "conversationId": "conv6",
        "customerId": "c1",
        "category": "Update",
        "text": "CRM integration performance improved by 40%.",
        "topics": ["CRM", "Performance", "Improvement"],
        "confidenceScore": 0.86,
        "urgencyScore": 3,
        "createdAt": "2025-09-12T09:05:00Z",
    },
]
