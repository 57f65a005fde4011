class GlobalMessages:
    # Auth Messages
    INVALID_CREDENTIALS = "Invalid credentials provided."
    LOGIN_SUCCESS = "Login successful."
    NOT_AUTHORIZED = "Your role is not allowed to perform this action."
    DOCTOR_NOT_ASSIGNED = "Only the assigned doctor can finalize this consultation."
    DOCTOR_SELF_ASSIGN_ONLY = "Doctors can only assign consultations to themselves."

    # Visit Messages
    VISIT_NOT_FOUND = "Visit not found."
    VISIT_ADMITTED = "Patient admitted to the waiting room."
    VISIT_ASSIGNED = "Patient assigned to consultation."
    VISIT_FINALIZED = "Consultation closed."
    NAME_REQUIRED = "Patient name is required."
    REASON_REQUIRED = "Reason for the visit is required."
    UNKNOWN_ROOM = "Room is not a known clinic room."

    # Catalog Messages
    DOCTOR_NOT_FOUND = "Doctor not found."
    PROCEDURE_NOT_FOUND = "Procedure not found."
    DOCTOR_SAVED = "Doctor saved successfully."
    PROCEDURE_SAVED = "Procedure saved successfully."
    PROCEDURE_DELETED = "Procedure deleted."
    SHARE_OUT_OF_RANGE = "Share percentages must be between 0 and 100."
    USERNAME_TAKEN = "This username is already in use."

    # Inventory Messages
    PRODUCT_NOT_FOUND = "Product not found."
    SUPPLIER_NOT_FOUND = "Supplier not found."
    SALE_REGISTERED = "Sale registered successfully."
    EMPTY_CART = "A sale needs at least one item."
    INSUFFICIENT_STOCK = "Not enough stock for {product}."

    # Report Messages
    REPORT_NOT_ENOUGH_DATA = "Not enough data to generate an analysis."
    REPORT_NOT_CONFIGURED = "Report generator is not configured."
    REPORT_CONNECTION_ERROR = "Could not reach the report generator. Check its endpoint and key."
    REPORT_GENERATION_ERROR = "Error generating report."

    # Backup Messages
    RESTORE_NOT_AN_OBJECT = "Backup document must be a JSON object."
    RESTORE_NOT_A_LIST = "Backup field '{field}' must be a list."
    RESTORE_INVALID_ENTRY = "Backup field '{field}' contains an invalid entry."
    RESTORE_COMPLETED = "Backup restored successfully."
