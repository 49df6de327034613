"""Per-entity CSV field tables and default export column order."""

from shelter.entities import EntityType
from shelter.interchange.codec import CsvCodec
from shelter.interchange.fields import FieldKind, column_spec, field_table

ANIMAL_FIELDS = field_table([
    column_spec("name"),
    column_spec("species"),
    column_spec("breed"),
    column_spec("age"),
    column_spec("gender"),
    column_spec("size"),
    column_spec("status"),
    column_spec("adoptionFee", FieldKind.INTEGER),
    column_spec("isSpayedNeutered", FieldKind.BOOLEAN),
    column_spec("isVaccinated", FieldKind.BOOLEAN),
    column_spec("isMicrochipped", FieldKind.BOOLEAN),
    column_spec("specialNeeds", FieldKind.BOOLEAN),
    column_spec("description"),
    column_spec("medicalNotes"),
    column_spec("behaviorNotes"),
    column_spec("tags", FieldKind.STRING_LIST),
    column_spec("images", FieldKind.NESTED_OBJECT_LIST, alt_text_field="name"),
])

ANIMAL_COLUMNS = (
    "name", "species", "breed", "age", "gender", "size", "status",
    "adoptionFee", "isSpayedNeutered", "isVaccinated", "isMicrochipped",
    "description", "medicalNotes", "behaviorNotes", "images",
)

# CSV column names keep the dashboard's export headers; paths follow the API model.
# The animal columns are read from the populated ``animal`` reference on export.
ADOPTION_INQUIRY_FIELDS = field_table([
    column_spec("applicantName"),
    column_spec("applicantEmail", path="email"),
    column_spec("applicantPhone", path="phone"),
    column_spec("applicantAddress", path="address"),
    column_spec("petExperience", path="experience"),
    column_spec("message"),
    column_spec("status"),
    column_spec("adminNotes"),
    column_spec("createdAt"),
    column_spec("animalName", export_path="animal.name"),
    column_spec("animalId", path="animal"),
    column_spec("animalSpecies", export_path="animal.species"),
    column_spec("animalBreed", export_path="animal.breed"),
])

ADOPTION_INQUIRY_COLUMNS = (
    "applicantName", "applicantEmail", "applicantPhone", "applicantAddress",
    "petExperience", "message", "status", "adminNotes", "createdAt",
    "animalName", "animalId", "animalSpecies", "animalBreed",
)

VOLUNTEER_FIELDS = field_table([
    column_spec("fullName", path="personalInfo.fullName"),
    column_spec("firstName", path="personalInfo.firstName"),
    column_spec("lastName", path="personalInfo.lastName"),
    column_spec("email", path="personalInfo.email"),
    column_spec("phone", path="personalInfo.phone"),
    column_spec("age", path="personalInfo.age"),
    column_spec("address", path="personalInfo.address"),
    column_spec("status"),
    column_spec("applicationStatus"),
    column_spec("createdAt"),
    column_spec("yearsExperience", FieldKind.INTEGER, path="experience.yearsExperience"),
    column_spec("previousExperience", path="experience.previousExperience"),
    column_spec("interests", FieldKind.STRING_LIST),
    column_spec("availabilityDays", FieldKind.STRING_LIST, path="availability.days"),
    column_spec("availabilityTimes", FieldKind.STRING_LIST, path="availability.times"),
    column_spec("hoursPerWeek", path="availability.hoursPerWeek"),
    column_spec("motivation"),
    column_spec("ownsPets", FieldKind.BOOLEAN, path="backgroundQuestions.ownsPets"),
    column_spec("petDetails", path="backgroundQuestions.petDetails"),
    column_spec(
        "criminalBackground",
        FieldKind.BOOLEAN,
        path="backgroundQuestions.criminalBackground",
    ),
    column_spec("criminalDetails", path="backgroundQuestions.criminalDetails"),
])

VOLUNTEER_COLUMNS = tuple(VOLUNTEER_FIELDS)

CODECS: dict[EntityType, CsvCodec] = {
    EntityType.ANIMALS: CsvCodec(ANIMAL_FIELDS, ANIMAL_COLUMNS),
    EntityType.ADOPTION_INQUIRIES: CsvCodec(ADOPTION_INQUIRY_FIELDS, ADOPTION_INQUIRY_COLUMNS),
    EntityType.VOLUNTEERS: CsvCodec(VOLUNTEER_FIELDS, VOLUNTEER_COLUMNS),
}
