"""Prompt templates rendered with Jinja2"""
from typing import Any

from jinja2 import Environment


jinja_env = Environment(
    keep_trailing_newline=False,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_prompt(template_str: str, **variables: Any) -> str:
    template = jinja_env.from_string(template_str)
    return template.render(**variables).strip()


SCORE_LEAD_SYSTEM = (
    "You are an expert sales analyst specializing in lead qualification and "
    "conversion prediction. Always respond with valid JSON."
)

SCORE_LEAD_PROMPT = """You are an expert sales analyst. Analyze the following lead data and provide a conversion likelihood score from 0-100 and a detailed explanation.

Lead Data:
- Name: {{ lead.full_name or 'Unknown' }}
- Company: {{ lead.company or 'Unknown' }}
- Email: {{ lead.email or 'Not provided' }}
- Job Title: {{ lead.job_title or 'Unknown' }}
- Status: {{ lead.status or 'Unknown' }}
- Priority: {{ lead.priority or 'Unknown' }}
- Source: {{ lead.source or 'Unknown' }}
- Event: {{ event.name if event else 'No event' }}
- Created: {{ lead.created_at or 'Unknown' }}
- Notes: {{ lead.notes or 'No notes' }}

Provide your response in the following JSON format:
{
  "score": <number 0-100>,
  "confidence": <number 0-1>,
  "reasoning": "<brief explanation>",
  "strengths": ["<strength 1>", "<strength 2>"],
  "weaknesses": ["<weakness 1>", "<weakness 2>"],
  "recommendations": ["<recommendation 1>", "<recommendation 2>"]
}"""

SUMMARIZE_LEAD_SYSTEM = "You are an expert sales analyst. Provide insights in valid JSON format only."

SUMMARIZE_LEAD_PROMPT = """Analyze this lead and provide a concise executive summary:

Lead Information:
- Name: {{ lead.full_name or 'Unknown' }}
- Company: {{ lead.company or 'Unknown' }}
- Email: {{ lead.email or 'Not provided' }}
- Phone: {{ lead.phone or 'Not provided' }}
- Status: {{ lead.status or 'Unknown' }}
- Source: {{ lead.source or 'Unknown' }}
- Budget: {{ lead.budget or 'Not specified' }}
- Created: {{ lead.created_at or 'Unknown' }}
- Last Updated: {{ lead.updated_at or 'Unknown' }}
- Notes: {{ lead.notes or 'No notes available' }}
{% if activities %}

Recent Activity:
{% for activity in activities %}
- {{ activity.activity_type }} ({{ activity.created_at }})
{% endfor %}
{% endif %}

Provide a JSON response with:
{
  "summary": "<2-3 sentence executive summary>",
  "keyInsights": ["<insight 1>", "<insight 2>", "<insight 3>"],
  "nextSteps": ["<recommended action 1>", "<recommended action 2>"],
  "sentiment": "<positive|neutral|negative>",
  "urgency": "<high|medium|low>"
}"""

QUALIFY_LEAD_SYSTEM = (
    "You are a B2B sales qualification expert. Analyze leads objectively based on the "
    "company's specific goals and strategy. Provide actionable insights that align with "
    "the company's primary business goal and ICP. Be honest about fit and specific in "
    "recommendations."
)

QUALIFY_LEAD_PROMPT = """Analyze this lead and assess their fit for our products/services:

Lead Information:
- Name: {{ lead.full_name }}
- Company: {{ lead.company or 'Not specified' }}
- Title: {{ lead.job_title or 'Not specified' }}
- Industry: {{ lead.industry or 'Not specified' }}
- Company Size: {{ lead.company_size or 'Not specified' }}
- Notes: {{ lead.notes or 'None' }}
- Current Lead Score: {{ lead_score if lead_score else 'Not scored' }}

Our Company Profile:
- Products: {{ profile.products | join(', ') }}
- Target Industries: {{ profile.target_industries | join(', ') }}
- Ideal Customer: {{ profile.company_sizes | join(', ') }} companies
- Common Pain Points We Address: {{ profile.pain_points | join(', ') }}

Provide a detailed qualification assessment with:
1. Overall Fit Score (0-100)
2. Industry Match (score, reasoning, is target industry?)
3. Company Size Match (score, reasoning, appropriate for products?)
4. Identified Pain Points (3-5 specific needs we can address)
5. Opportunities (3-5 ways to add value)
6. Risks (2-3 potential challenges)
7. Recommendations (3-5 next steps)
8. Overall Qualification (high/medium/low/not_qualified)
9. Brief reasoning for the qualification level

Format as JSON:
{
  "fitScore": 85,
  "industryMatch": {"score": 90, "reasoning": "why industry fits", "isTargetIndustry": true},
  "companySizeMatch": {"score": 80, "reasoning": "why size fits", "appropriateForProducts": true},
  "painPoints": ["pain 1", "pain 2"],
  "opportunities": ["opportunity 1", "opportunity 2"],
  "risks": ["risk 1", "risk 2"],
  "recommendations": ["recommendation 1", "recommendation 2"],
  "qualification": "high",
  "reasoning": "Overall assessment explanation"
}"""

PREDICT_COMPLETION_SYSTEM = (
    "You are an expert event planner estimating task completion times based on company "
    "goals and resources. Be realistic and account for typical delays and dependencies. "
    "Consider the company's stage and market when estimating."
)

PREDICT_COMPLETION_PROMPT = """Analyze this event planning task and estimate completion time:

Task: {{ task.title }}
Description: {{ task.description or 'No description' }}
Priority: {{ task.priority }}

Provide:
1. Estimated days to complete (realistic for event planning)
2. Complexity level (low/medium/high)
3. Confidence in estimate (0-100)
4. Brief reasoning

Format as JSON:
{
  "estimatedDays": number,
  "complexity": "low" | "medium" | "high",
  "confidence": number,
  "reasoning": "brief explanation"
}"""

GENERATE_TASKS_SYSTEM = (
    "You are an expert event planning assistant specializing in creating comprehensive "
    "task checklists for events. You understand event management best practices, "
    "timelines, and dependencies."
)

GENERATE_TASKS_PROMPT = """Generate a comprehensive task checklist for the following event:

Event Name: {{ event.name or 'Upcoming Event' }}
Event Type: {{ event_type }}
Event Date: {{ event.start_date or 'TBD' }}
Target Attendees/Leads: {{ event.target_leads or 'Not specified' }}
Budget: {{ ('$%s' % event.total_budget) if event.total_budget else 'Not specified' }}

Context: {{ context.description }}
Typical tasks for this event type: {{ context.typical_tasks | join(', ') }}
{% if existing_titles %}

IMPORTANT: The following tasks already exist for this event. DO NOT generate tasks with similar titles or duplicate functionality:
{% for title in existing_titles %}
{{ loop.index }}. {{ title }}
{% endfor %}

Generate ONLY NEW tasks that are not covered by the existing ones above.
{% endif %}

Please generate 10-15 specific, actionable tasks needed to successfully execute this event. For each task, provide:
1. A clear, specific title (max 60 characters)
2. A detailed description of what needs to be done (2-3 sentences)
3. Priority level (urgent, high, medium, or low)
4. Number of days before the event it should be completed (e.g., -30 for 30 days before)
5. Optional: estimated cost if applicable

Format your response as a JSON array with this structure:
[
  {
    "title": "Task title",
    "description": "Detailed description",
    "priority": "high",
    "estimated_days_before_event": -30,
    "category": "Venue",
    "estimated_cost": 1000
  }
]

Focus on creating a realistic, actionable timeline. Ensure tasks are in logical order based on dependencies."""

ANALYZE_DEPENDENCIES_SYSTEM = (
    "You are an expert project manager specializing in task dependency analysis. "
    "You identify prerequisite relationships between tasks and suggest optimal execution order."
)

ANALYZE_DEPENDENCIES_PROMPT = """Analyze the following tasks and identify dependencies (which tasks must be completed before others can start):

{% for task in tasks %}
{{ loop.index }}. [{{ task.id }}] {{ task.title }}: {{ task.description or 'No description' }}
{% endfor %}

For each task that has dependencies, specify which other tasks must be completed first and explain why.

Format your response as a JSON array:
[
  {
    "taskId": "task-uuid-here",
    "dependsOn": ["prerequisite-task-uuid-1", "prerequisite-task-uuid-2"],
    "reasoning": "Brief explanation of why this dependency exists"
  }
]

Only include tasks that have actual dependencies. If a task has no prerequisites, don't include it in the response."""

EMAIL_DRAFT_SYSTEM = (
    "You are an expert sales email writer. Always respond with valid JSON only, "
    "no markdown formatting."
)

EMAIL_DRAFT_PROMPT = """You are an expert sales email writer. Generate a personalized email for this lead.

Lead Information:
- Name: {{ lead.full_name }}
- Company: {{ lead.company or 'Unknown' }}
- Title: {{ lead.job_title or 'Unknown' }}
- Email: {{ lead.email or '' }}
- Status: {{ lead.status or 'new' }}
- Lead Score: {{ lead_score }}/100
- Event: {{ event.name if event else 'No event' }}
- Notes: {{ lead.notes or 'None' }}

Template Information:
- Name: {{ template.name }}
- Goal: {{ template.goal }}
- Tone: {{ tone }}
- Language: {{ language }}

Email Structure:
{% for block in template.blocks %}

Block {{ loop.index }} ({{ block.block_type }}):
{{ block.content }}
{% if block.ai_guidance %}
Guidance: {{ block.ai_guidance }}
{% endif %}
{% endfor %}
{% if template.ctas %}

Call-to-Action Options:
{% for cta in template.ctas %}
- {{ cta.cta_text }} ({{ cta.cta_url or 'no URL' }})
{% endfor %}
{% endif %}

Variables to Fill:
{% for name in variables %}
- {{ '{{' ~ name ~ '}}' }}: [Fill with appropriate value from lead data]
{% endfor %}
{% if personalization_points %}

Personalization Points (incorporate these):
{% for point in personalization_points %}
{{ loop.index }}. {{ point }}
{% endfor %}
{% endif %}
{% if template.max_words %}

Keep the body under {{ template.max_words }} words.
{% endif %}

Instructions:
1. Generate a compelling subject line (choose from template subjects or create a new one)
2. Fill all variables with appropriate values from the lead data
3. Personalize the content based on lead information
4. Maintain the {{ tone }} tone
5. Keep the email concise and action-oriented
6. Include a clear call-to-action
7. Separate ALL paragraphs with exactly TWO newlines (\\n\\n)

Output ONLY valid JSON (no markdown, no code blocks):
{
  "subject": "email subject line",
  "body": "complete email body with all variables filled",
  "variables": {"variable_name": "filled_value"},
  "selectedCta": "CTA text if applicable"
}"""

SUBJECT_LINES_SYSTEM = (
    "You are an expert email copywriter specializing in compelling subject lines. "
    "Always respond with valid JSON only."
)

SUBJECT_LINES_PROMPT = """You are an expert email copywriter. Generate {{ count }} compelling email subject lines.

Context:
- Lead: {{ lead.full_name }} from {{ lead.company or 'Unknown' }}
- Lead Title: {{ lead.job_title or 'Unknown' }}
- Template: {{ template.name }}
- Template Goal: {{ template.goal }}
- Tone: {{ tone }}
{% if email_body %}
- Email Body Preview: {{ email_body[:200] }}...
{% endif %}

Requirements:
1. Generate {{ count }} different subject line options
2. Each should be 30-60 characters (optimal for email clients)
3. Vary the approach:
   - Option 1: Direct and action-oriented
   - Option 2: Question-based or curiosity-driven
   - Option 3: Value-focused or benefit-driven
{% if count > 3 %}
   - Option 4: Personalized or relationship-focused
{% endif %}
{% if count > 4 %}
   - Option 5: Urgency or time-sensitive
{% endif %}
4. Match the specified tone: {{ tone }}
5. Make them specific to the lead and context
6. Avoid spam trigger words (FREE, URGENT, ACT NOW, etc.)

Output ONLY valid JSON (no markdown, no code blocks):
{
  "subjectLines": [
    {
      "text": "subject line text",
      "tone": "professional|casual|friendly",
      "length": 45,
      "approach": "action-oriented|question|value|personalized|urgency"
    }
  ]
}"""

RECOMMEND_EMAIL_SYSTEM = (
    "You are an expert sales advisor. Always respond with valid JSON only, "
    "no markdown formatting."
)

RECOMMEND_EMAIL_PROMPT = """You are an expert sales advisor. Analyze this lead and recommend whether to send an email.

Lead Context:
- Name: {{ lead.full_name }}
- Company: {{ lead.company or 'Unknown' }}
- Title: {{ lead.job_title or 'Unknown' }}
- Status: {{ lead.status or 'new' }}
- Lead Score: {{ lead_score }}/100
- Last contacted: {{ 'Never' if days_since_last_contact is none else '%d days ago' % days_since_last_contact }}
- Event: {{ event.name if event else 'No event' }}{% if days_since_event is not none %} ({{ days_since_event }} days ago){% endif %}

- Contact frequency: {{ contact_frequency }} contacts in last 7 days
- Notes: {{ lead.notes or 'None' }}

Available Templates:
{% for t in templates %}
- ID: {{ t.id }}, Name: {{ t.name }}, Goal: {{ t.goal }}, Tone: {{ t.tone }}
{% endfor %}

Task:
1. Determine if we should send an email (yes/wait/no)
2. Recommend the TOP 3 most suitable templates from the list above
3. For each template, provide a score (0-100) and 2-3 specific reasons why it is suitable
4. Rank templates by score (highest first)

Constraints:
- Reasons must be specific and traceable to lead data
- Consider contact fatigue (>2 contacts in 7 days = risk)
- Consider timing (too soon after last contact = risk)
- Consider lead engagement (low score + no recent activity = wait)

Output ONLY valid JSON (no markdown, no code blocks):
{
  "shouldSend": "yes|wait|no",
  "recommendedTemplates": [
    {"templateId": "uuid from templates above", "templateName": "exact template name", "score": 95, "reasons": ["reason1", "reason2"]}
  ],
  "primaryRecommendation": "uuid of top template",
  "riskFlags": ["optional warning if any"]
}"""

ANALYZE_EVENT_SYSTEM = (
    "You are an expert event planner and marketing strategist. Provide detailed, "
    "actionable insights based on event data and company goals. Focus recommendations "
    "on the company's primary business goal and ICP. Be specific and realistic in your "
    "recommendations."
)

ANALYZE_EVENT_PROMPT = """Analyze this event and provide detailed insights:

Event Details:
- Name: {{ event.name }}
- Type: {{ event.event_type or 'Not specified' }}
- Description: {{ event.description or 'Not provided' }}
- Budget: {{ ('${:,.0f}'.format(event.total_budget)) if event.total_budget else 'Not specified' }}
- Expected Attendees: {{ event.expected_attendees or 'Not specified' }}
- Location: {{ event.location or 'Not specified' }}

Provide a comprehensive analysis with:
1. Target Audience (demographics, job roles, interests, company sizes)
2. Top 5 Suitable Industries (with fit scores 0-100 and reasoning)
3. Budget Breakdown (percentage allocation across 6 categories with recommendations)
4. ROI Insights (attendance range, lead gen potential, networking value, brand awareness, ROI estimate)
5. 5-7 Actionable Recommendations
6. Brief 2-sentence summary

Format as JSON matching this structure:
{
  "targetAudience": {"demographics": [], "jobRoles": [], "interests": [], "companySize": []},
  "suitableIndustries": [{"industry": "Technology", "fitScore": 95, "reasoning": "why it fits"}],
  "budgetBreakdown": {
    "venue": {"percentage": 30, "recommendation": "specific advice"},
    "marketing": {"percentage": 25, "recommendation": "specific advice"},
    "catering": {"percentage": 20, "recommendation": "specific advice"},
    "technology": {"percentage": 10, "recommendation": "specific advice"},
    "speakers": {"percentage": 10, "recommendation": "specific advice"},
    "miscellaneous": {"percentage": 5, "recommendation": "specific advice"}
  },
  "roiInsights": {
    "expectedAttendance": {"min": 100, "max": 150},
    "leadGenerationPotential": "high",
    "networkingValue": "very_high",
    "brandAwareness": "high",
    "estimatedROI": "200-300% based on X factors"
  },
  "recommendations": ["recommendation 1", "recommendation 2"],
  "summary": "Two sentence overview of the event and its value proposition"
}"""

CONTENT_PROMPTS: dict[str, tuple[str, str]] = {
    "email_followup": (
        "You are an expert sales copywriter specializing in professional follow-up emails.",
        """Write a professional follow-up email for a lead with the following details:

Lead Name: {{ context.leadName or 'Prospect' }}
Company: {{ context.company or 'their company' }}
Last Interaction: {{ context.lastInteraction or 'initial contact' }}
Context: {{ context.notes or 'No additional context' }}

The email should be:
- Professional yet warm
- Concise (3-4 short paragraphs)
- Include a clear call-to-action
- Personalized based on the context provided

Format: Plain text email (no HTML)""",
    ),
    "event_description": (
        "You are an expert event marketing copywriter.",
        """Create a compelling event description based on:

Event Name: {{ context.eventName or 'Upcoming Event' }}
Event Type: {{ context.eventType or 'Business Event' }}
Target Audience: {{ context.targetAudience or 'Professionals' }}
Key Points: {{ context.keyPoints or 'Not specified' }}
Tone: {{ context.tone or 'Professional and engaging' }}

The description should be:
- Engaging and exciting
- 2-3 paragraphs
- Highlight key benefits or takeaways
- Include a call-to-register or attend

Format: Plain text description""",
    ),
    "event_invitation": (
        "You are an expert email marketer specializing in event invitations.",
        """Write an engaging email invitation for an event:

Event Name: {{ context.eventName or 'Upcoming Event' }}
Date: {{ context.eventDate or 'TBD' }}
Location: {{ context.location or 'TBD' }}
Description: {{ context.description or 'An exciting event' }}
Target Audience: {{ context.targetAudience or 'Our community' }}

The invitation should be:
- Exciting and persuasive
- Include WHO, WHAT, WHEN, WHERE
- Strong call-to-action to register/RSVP
- Professional yet friendly tone

Format: Plain text email""",
    ),
    "task_description": (
        "You are an experienced project manager specializing in clear task documentation.",
        """Create a clear task description for:

Task Title: {{ context.taskTitle or 'Task' }}
Context: {{ context.context or 'General task' }}
Expected Outcome: {{ context.outcome or 'Not specified' }}

The description should:
- Be clear and actionable
- Include specific steps if applicable
- Mention expected deliverables
- Be concise (1-2 paragraphs)

Format: Plain text description""",
    ),
}
