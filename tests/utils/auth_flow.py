PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


async def register(client, user, image=PNG_BYTES, filename="avatar.png", content_type="image/png"):
    files = None
    if image is not None:
        files = {"profile_image": (filename, image, content_type)}
    return await client.post("/api/auth/register", data=user, files=files)


async def register_and_verify(client, user):
    """Register a user and complete email verification, returning the register body"""
    registered = await register(client, user)
    assert registered.status_code == 201

    sent = await client.post("/api/auth/send-otp", json={"email": user["email"]})
    assert sent.status_code == 200
    otp = sent.json()["data"]["otp"]

    verified = await client.post(
        "/api/auth/verify-email", json={"email": user["email"], "otp": otp}
    )
    assert verified.status_code == 200
    return registered.json()


async def login(client, user):
    return await client.post(
        "/api/auth/login", json={"email": user["email"], "password": user["password"]}
    )
