"""
Prompts for Folder Planner Agent
"""

SYSTEM_PROMPT = """You are an expert in document management and business organization.
You reply with valid JSON only."""


FOLDER_STRUCTURE_PROMPT = """Design a folder structure for a {industry} business's document portal.

BUSINESS DESCRIPTION:
{business_description}

USER REQUIREMENTS:
{user_prompt}

DOCUMENT TYPES: {document_types}
ORGANIZATION METHOD: {organization_method}
COLLABORATION STYLE: {collaboration_style}

Rules:
1. Use practical, professional folder names suited to this business type
2. Cover the document categories that are common in this industry
3. At most 3 levels deep
4. Include an "Unstructured" folder at the root for unsorted documents
5. List parents before their children. "parentId" is the 1-based position of
   the parent folder in this same list, or null for a root folder
6. "path" is the slash-joined chain of folder names from the root"""
