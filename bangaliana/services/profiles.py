from bangaliana.core.results import insert_result
from bangaliana.models.user_profile import UserProfile


async def create_profile(**fields) -> dict:
    profile = UserProfile(**fields)
    await profile.insert()
    return insert_result(profile.id)


async def list_profiles() -> list[UserProfile]:
    return await UserProfile.find_all().to_list()


async def list_profiles_for(email: str) -> list[UserProfile]:
    return await UserProfile.find(UserProfile.email == email).to_list()
