from datetime import datetime
from pydantic import BaseModel


class PageBase(BaseModel):
    # title y slug se validan en el router (400 si faltan)
    title: str | None = None
    slug: str | None = None
    body: str | None = None

    hero_title: str | None = None
    hero_video_url: str | None = None
    hero_image_url: str | None = None
    hero_video_source_type: str | None = None
    hero_image_source_type: str | None = None

    homepage_about_section_text: str | None = None
    homepage_services_section_text: str | None = None
    main_intro_body: str | None = None
    homepage_bottom_image_1_url: str | None = None
    homepage_bottom_image_2_url: str | None = None
    homepage_bottom_image_3_url: str | None = None

    vision_title: str | None = None
    vision_body: str | None = None
    mission_title: str | None = None
    mission_body: str | None = None
    excellence_title: str | None = None
    excellence_image_1_url: str | None = None
    excellence_image_2_url: str | None = None
    excellence_image_3_url: str | None = None

    gallery_intro_body: str | None = None
    images: list[str] | None = None

    contact_overlay_text: str | None = None
    contact_title: str | None = None
    contact_phone: str | None = None
    contact_location_title: str | None = None
    contact_location_body: str | None = None
    contact_email_title: str | None = None
    contact_email_address: str | None = None
    contact_whatsapp_number: str | None = None

    service_1_title: str | None = None
    service_1_body: str | None = None
    service_1_image_url: str | None = None
    service_2_title: str | None = None
    service_2_body: str | None = None
    service_2_image_url: str | None = None
    service_3_title: str | None = None
    service_3_body: str | None = None
    service_3_image_url: str | None = None

    faq_main_title: str | None = None
    faq_1_question: str | None = None
    faq_1_answer: str | None = None
    faq_2_question: str | None = None
    faq_2_answer: str | None = None
    faq_3_question: str | None = None
    faq_3_answer: str | None = None
    faq_4_question: str | None = None
    faq_4_answer: str | None = None
    faq_5_question: str | None = None
    faq_5_answer: str | None = None


class PageCreate(PageBase):
    pass


class PageUpdate(PageBase):
    pass


class PageOut(PageBase):
    id: int
    title: str
    slug: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
