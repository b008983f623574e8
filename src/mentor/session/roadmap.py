from mentor.models import RoadmapMilestone
from mentor.session.state import MentorSession


async def refresh_roadmap(client, session: MentorSession) -> list[RoadmapMilestone]:
    """Generate a roadmap for the session's subject and replace the current one."""
    interest, level = session.require_subject()
    payload = await client.generate_roadmap(interest, level)
    return session.set_roadmap(payload.roadmap)
